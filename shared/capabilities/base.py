"""Capability interfaces exposed to the reasoning engine.

A capability is a named, schema-described unit of work with a uniform
invocation shape: ``await capability.call(payload) -> str``. Two families exist:

- ``Tool``: structured argument payload, parsed by a pydantic model.
- ``SubAgent``: a task string, extracted from the ``task`` field of the payload.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Type

import pydantic
from pydantic import BaseModel

from shared.errors import ValidationError
from shared.utils.logging_utils import log_tool_call, log_tool_result

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """What the reasoning engine sees of a capability."""

    name: str
    description: str
    input_schema: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema,
        }

    def to_openai_tool(self) -> Dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_schema,
            },
        }


class Capability(ABC):
    """Common interface for tools and sub-agents."""

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""

    @property
    @abstractmethod
    def parameters(self) -> Dict[str, Any]:
        """JSON schema advertised to the engine (guidance only, not enforced)."""

    @abstractmethod
    async def invoke(self, payload: Any) -> str:
        """Validate ``payload`` and run the capability."""

    def catalog_entry(self) -> CatalogEntry:
        return CatalogEntry(self.name, self.description, self.parameters)

    async def call(self, payload: Any) -> str:
        """Entry point used by the dispatcher; logs start, success and failure."""
        log_tool_call(LOGGER, self.name, payload)
        try:
            result = await self.invoke(payload)
        except Exception as e:
            log_tool_result(LOGGER, self.name, e, success=False)
            raise
        log_tool_result(LOGGER, self.name, result)
        return result


class Tool(Capability):
    """Capability taking a structured payload.

    Subclasses declare ``args_model`` and implement ``execute(params)``.
    """

    args_model: ClassVar[Optional[Type[BaseModel]]] = None

    @property
    def parameters(self) -> Dict[str, Any]:
        if self.args_model is None:
            return {"type": "object", "properties": {}}
        schema = self.args_model.model_json_schema()
        schema.pop("title", None)
        return schema

    def parse_arguments(self, payload: Any) -> BaseModel:
        if self.args_model is None:
            raise ValidationError(f"{self.name}: no argument model declared")
        if not isinstance(payload, dict):
            raise ValidationError(
                f"Invalid arguments for {self.name}: expected a JSON object, got {payload!r}"
            )
        try:
            return self.args_model.model_validate(payload)
        except pydantic.ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            )
            raise ValidationError(f"Invalid arguments for {self.name}: {problems}") from e

    async def invoke(self, payload: Any) -> str:
        params = self.parse_arguments(payload)
        return await self.execute(params)

    @abstractmethod
    async def execute(self, params: Any) -> str:
        ...


class SubAgent(Capability):
    """Capability taking a task string; runs its own conversation."""

    task_description: ClassVar[str] = "Task to execute"

    @property
    def parameters(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "task": {
                    "type": "string",
                    "description": self.task_description,
                }
            },
            "required": ["task"],
        }

    async def invoke(self, payload: Any) -> str:
        task = payload.get("task") if isinstance(payload, dict) else None
        if not isinstance(task, str) or not task.strip():
            raise ValidationError(f"No task provided to agent {self.name}")
        return await self.execute(task)

    @abstractmethod
    async def execute(self, task: str) -> str:
        ...


__all__ = ["CatalogEntry", "Capability", "Tool", "SubAgent"]

"""Prompt template builder.

System prompts live in Jinja2 templates next to the agent that uses them and
are rendered in a sandboxed environment.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Union

from jinja2.sandbox import SandboxedEnvironment

from shared.capabilities.base import CatalogEntry


def get_current_datetime_tag() -> str:
    """Current time as ``<current_datetime>YYYY-MM-DD HH:MM:SS UTC</current_datetime>``."""
    now = datetime.now(timezone.utc)
    return f"<current_datetime>{now.strftime('%Y-%m-%d %H:%M:%S UTC')}</current_datetime>"


class PromptBuilder:
    """Loads and renders one template file."""

    def __init__(self, template_path: Union[str, Path]):
        self.template_path = Path(template_path)

    def load(self) -> str:
        with open(self.template_path, "r", encoding="utf-8") as f:
            return f.read()

    def render(self, catalog: Iterable[CatalogEntry] = (), **params: Any) -> str:
        env = SandboxedEnvironment(trim_blocks=True, lstrip_blocks=True)
        params.setdefault("current_datetime", get_current_datetime_tag())
        params["capabilities"] = [entry.to_dict() for entry in catalog]
        return env.from_string(self.load()).render(**params).strip()

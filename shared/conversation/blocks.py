"""Tool-call and tool-result blocks exchanged within one round."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from langchain_core.messages import AIMessage, ToolMessage

from shared.errors import ContractViolation


@dataclass(frozen=True)
class ToolCall:
    """One capability invocation requested by the reasoning engine."""

    name: str
    id: str
    payload: Any


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one ToolCall. ``compacted_output`` is what the engine sees."""

    id: str
    name: str
    raw_output: str
    compacted_output: str

    def to_message(self) -> ToolMessage:
        return ToolMessage(content=self.compacted_output, tool_call_id=self.id, name=self.name)


def extract_text(message: AIMessage) -> Optional[str]:
    """Return the trailing text of an assistant message, if any."""
    content = message.content
    if isinstance(content, str):
        return content if content.strip() else None

    text = None
    for block in content or []:
        if isinstance(block, str):
            candidate = block
        elif isinstance(block, dict) and block.get("type") == "text":
            candidate = block.get("text", "")
        else:
            continue
        if candidate.strip():
            text = candidate
    return text


def parse_response(message: AIMessage) -> Tuple[List[ToolCall], Optional[str]]:
    """Split an engine response into tool calls (emitted order) and trailing text.

    Malformed calls reported by the model in ``invalid_tool_calls`` are kept with
    their raw argument text as payload; the capability rejects them during validation.
    A call without an id gets a generated one, written back into ``message`` so the
    assistant turn and its tool results stay paired in the history.

    Raises:
        ContractViolation: two calls in the same response share a correlation id
    """
    calls: List[ToolCall] = []
    for raw in list(message.tool_calls or []) + list(message.invalid_tool_calls or []):
        call_id = raw.get("id")
        if not call_id:
            call_id = f"call_{uuid.uuid4().hex[:12]}"
            raw["id"] = call_id
        calls.append(ToolCall(name=raw.get("name") or "", id=call_id, payload=raw.get("args")))

    seen = set()
    for call in calls:
        if call.id in seen:
            raise ContractViolation(f"Duplicate tool call id in one response: {call.id}")
        seen.add(call.id)

    return calls, extract_text(message)

"""Pytest configuration and fixtures for all tests.

This file is automatically loaded by pytest and ensures proper test environment setup.
"""

import sys
from pathlib import Path
from typing import Callable, List, Sequence, Union

import pytest

# Ensure project root is in PYTHONPATH for imports to work
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from langchain_core.messages import AIMessage, BaseMessage  # noqa: E402

from shared.audit.session import AuditSession, MemoryAuditSink  # noqa: E402


def ai_text(text: str) -> AIMessage:
    return AIMessage(content=text)


def ai_calls(*calls, text: str = "") -> AIMessage:
    """Build an assistant message requesting ``calls``: (name, args, id) tuples."""
    return AIMessage(
        content=text,
        tool_calls=[{"name": name, "args": args, "id": call_id} for name, args, call_id in calls],
    )


Reply = Union[AIMessage, Callable[[Sequence[BaseMessage]], AIMessage]]


class ScriptedEngine:
    """Reasoning engine that replays a fixed list of responses.

    Each entry is an AIMessage or a callable receiving the conversation. The
    last entry repeats once the script is exhausted. Every request is recorded.
    """

    def __init__(self, replies: List[Reply]):
        self.replies = list(replies)
        self.requests: List[dict] = []

    async def respond(self, system_prompt, messages, catalog):
        self.requests.append(
            {
                "system_prompt": system_prompt,
                "messages": list(messages),
                "catalog": [entry.name for entry in catalog],
            }
        )
        index = min(len(self.requests) - 1, len(self.replies) - 1)
        reply = self.replies[index]
        return reply(messages) if callable(reply) else reply

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def audit_sink():
    return MemoryAuditSink()


@pytest.fixture
def session(audit_sink):
    return AuditSession(audit_sink)

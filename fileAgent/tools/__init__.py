"""File tools registered by the file agent."""

from __future__ import annotations

from typing import List

from shared.audit.session import AuditSession
from shared.capabilities.base import Tool
from shared.config.settings import ContextSettings, GovernanceSettings

from .bash import BashTool
from .edit import EditTool, MultiEditTool
from .find import FindTool
from .glob_tool import GlobTool
from .grep import GrepTool
from .ls import LsTool
from .read import ReadTool
from .todo_write import TodoWriteTool
from .write import WriteTool


def build_file_tools(
    session: AuditSession,
    governance: GovernanceSettings | None = None,
    context: ContextSettings | None = None,
) -> List[Tool]:
    """Instantiate the ten file tools in catalog order."""
    governance = governance or GovernanceSettings()
    context = context or ContextSettings()
    return [
        ReadTool(line_char_limit=context.line_char_limit),
        WriteTool(),
        EditTool(),
        MultiEditTool(max_edits=governance.max_edits_per_call),
        LsTool(),
        GlobTool(),
        FindTool(),
        GrepTool(),
        BashTool(),
        TodoWriteTool(session),
    ]


__all__ = [
    "BashTool",
    "EditTool",
    "FindTool",
    "GlobTool",
    "GrepTool",
    "LsTool",
    "MultiEditTool",
    "ReadTool",
    "TodoWriteTool",
    "WriteTool",
    "build_file_tools",
]

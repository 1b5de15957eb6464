"""FileAgent - capability agent for filesystem and shell work.

Runs its own conversation with the reasoning engine over ten tools
(read, write, edit, multi_edit, ls, glob, find, grep, bash, todo_write)
and is exposed to the orchestrator as the ``file_agent`` sub-agent.
"""

from .agent import FileAgent

__all__ = ["FileAgent"]

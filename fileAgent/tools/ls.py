"""Directory listing tool."""

from __future__ import annotations

import asyncio
import fnmatch
from typing import List

from pydantic import BaseModel, Field

from fileAgent.tools.paths import resolve_directory
from shared.capabilities.base import Tool


class LsArgs(BaseModel):
    path: str = Field(default=".", description="Directory to list")
    ignore: List[str] = Field(
        default_factory=list,
        description="Glob patterns to ignore (e.g. ['.git', 'node_modules'])",
    )
    show_hidden: bool = Field(default=False, description="Include entries starting with '.'")


def is_ignored(name: str, patterns: List[str]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) or pattern == name for pattern in patterns)


class LsTool(Tool):
    name = "ls"
    description = "List a directory, one entry per line; directories end with '/'."
    args_model = LsArgs

    async def execute(self, params: LsArgs) -> str:
        return await asyncio.to_thread(self._list, params)

    def _list(self, params: LsArgs) -> str:
        directory = resolve_directory(params.path)
        entries = []
        for child in directory.iterdir():
            if not params.show_hidden and child.name.startswith("."):
                continue
            if is_ignored(child.name, params.ignore):
                continue
            entries.append(f"{child.name}/" if child.is_dir() else child.name)
        if not entries:
            return f"Directory is empty: {directory}"
        return "\n".join(sorted(entries))

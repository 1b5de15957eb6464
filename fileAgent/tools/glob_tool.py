"""Glob tool: files matching a pattern, newest first."""

from __future__ import annotations

import asyncio

from pydantic import BaseModel, Field

from fileAgent.tools.paths import resolve_directory
from shared.capabilities.base import Tool

SKIPPED_PARTS = {"node_modules", "target", "__pycache__"}


class GlobArgs(BaseModel):
    pattern: str = Field(description="Glob pattern, e.g. '**/*.py' or 'src/*.txt'")
    path: str = Field(default=".", description="Directory to search in")


class GlobTool(Tool):
    name = "glob"
    description = "Find files matching a glob pattern such as '**/*.py'. Results are newest first."
    args_model = GlobArgs

    async def execute(self, params: GlobArgs) -> str:
        return await asyncio.to_thread(self._glob, params)

    def _glob(self, params: GlobArgs) -> str:
        root = resolve_directory(params.path)
        matches = []
        for candidate in root.glob(params.pattern):
            if not candidate.is_file():
                continue
            relative = candidate.relative_to(root)
            if any(part.startswith(".") or part in SKIPPED_PARTS for part in relative.parts[:-1]):
                continue
            matches.append((candidate.stat().st_mtime, relative.as_posix()))
        if not matches:
            return f"No files found matching pattern: {params.pattern}"
        matches.sort(key=lambda item: (-item[0], item[1]))
        return "\n".join(path for _, path in matches)

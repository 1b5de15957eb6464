"""Find tool: recursive walk with name/type/depth filters."""

from __future__ import annotations

import asyncio
import fnmatch
import os
from typing import Literal, Optional

from pydantic import BaseModel, Field

from fileAgent.tools.paths import resolve_directory
from shared.capabilities.base import Tool


class FindArgs(BaseModel):
    path: str = Field(default=".", description="Directory to start from")
    name: Optional[str] = Field(default=None, description="Name pattern, e.g. '*.py'")
    type: Optional[Literal["f", "d"]] = Field(
        default=None, description="'f' for files, 'd' for directories"
    )
    max_depth: Optional[int] = Field(default=None, ge=0, description="Maximum depth to descend")


class FindTool(Tool):
    name = "find"
    description = "Recursively find files or directories by name pattern, type and depth."
    args_model = FindArgs

    async def execute(self, params: FindArgs) -> str:
        return await asyncio.to_thread(self._find, params)

    def _find(self, params: FindArgs) -> str:
        root = resolve_directory(params.path)
        results = []
        for current, dirnames, filenames in os.walk(root):
            rel_dir = os.path.relpath(current, root)
            depth = 0 if rel_dir == "." else rel_dir.count(os.sep) + 1
            dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
            subdirs = list(dirnames)
            if params.max_depth is not None and depth + 1 >= params.max_depth:
                dirnames[:] = []

            candidates = []
            if params.type != "f":
                candidates.extend(subdirs)
            if params.type != "d":
                candidates.extend(sorted(filenames))

            for entry in candidates:
                if params.name and not fnmatch.fnmatch(entry, params.name):
                    continue
                if params.max_depth is not None and depth + 1 > params.max_depth:
                    continue
                results.append(os.path.normpath(os.path.join(rel_dir, entry)))

        if not results:
            return f"No matches found in {root}"
        return "\n".join(results)

"""Read tool: line-numbered file content."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from fileAgent.tools.paths import format_size, is_binary, resolve_path
from shared.capabilities.base import Tool
from shared.errors import CapabilityExecutionError, ValidationError

LOGGER = logging.getLogger(__name__)

DEFAULT_RANGE_LIMIT = 1000


class ReadArgs(BaseModel):
    file_path: str = Field(description="Absolute path to the file to read")
    offset: Optional[int] = Field(
        default=None, ge=0, description="Line number to start reading from (0-based)"
    )
    limit: Optional[int] = Field(
        default=None, ge=1, description="Number of lines to read; omit to read the whole file"
    )


def number_lines(lines: List[str], start: int = 0, line_char_limit: int = 2000) -> str:
    numbered = []
    for i, line in enumerate(lines):
        if len(line) > line_char_limit:
            line = line[:line_char_limit] + "... [TRUNCATED]"
        numbered.append(f"{start + i + 1:>5}→{line}")
    return "\n".join(numbered)


def describe_file(path: Path) -> str:
    try:
        size = format_size(path.stat().st_size)
    except OSError:
        return f"File: {path}"
    suffix = f" ({path.suffix[1:].upper()})" if path.suffix else ""
    return f"File: {path}{suffix} - Size: {size}"


class ReadTool(Tool):
    name = "read"
    description = (
        "Read a file with line numbers. Large files are sampled automatically; "
        "use offset/limit to read a specific section."
    )
    args_model = ReadArgs

    def __init__(self, line_char_limit: int = 2000):
        self.line_char_limit = line_char_limit

    async def execute(self, params: ReadArgs) -> str:
        return await asyncio.to_thread(self._read, params)

    def _read(self, params: ReadArgs) -> str:
        path = resolve_path(params.file_path)
        if not path.exists():
            raise ValidationError(f"File does not exist: {params.file_path}")
        if not path.is_file():
            raise ValidationError(f"Path is not a file: {params.file_path}")

        info = describe_file(path)
        if is_binary(path):
            return (
                f"{info}\n\nThis appears to be a binary file and cannot be displayed as text.\n"
                "Consider using specialized tools for binary file analysis."
            )

        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise CapabilityExecutionError(f"Failed to read file: {e}") from e
        lines = content.splitlines()

        if params.offset is None and params.limit is None:
            return f"{info}\n\n{number_lines(lines, 0, self.line_char_limit)}"

        offset = params.offset or 0
        limit = params.limit or DEFAULT_RANGE_LIMIT
        if offset >= len(lines):
            return f"{info}\n\nOffset {offset} exceeds file length ({len(lines)} lines)"

        end = min(offset + limit, len(lines))
        parts = [
            f"{info}\n",
            f"=== LINES {offset + 1}-{end} of {len(lines)} ===\n",
            number_lines(lines[offset:end], offset, self.line_char_limit),
        ]
        if end < len(lines):
            parts.append(f"\n... {len(lines) - end} more lines follow ...")
        return "\n".join(parts)

"""Write tool: create or overwrite a whole file."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from pydantic import BaseModel, Field

from fileAgent.tools.paths import resolve_path
from shared.capabilities.base import Tool
from shared.errors import CapabilityExecutionError, ValidationError

LOGGER = logging.getLogger(__name__)

PROTECTED_DIRECTORIES = ("/etc/", "/usr/", "/bin/", "/sbin/", "/var/log/", "/.ssh/")

IMPORTANT_FILES = {
    "pyproject.toml",
    "setup.py",
    "package.json",
    "requirements.txt",
    "dockerfile",
    "makefile",
    ".gitignore",
    "readme.md",
    "license",
}

TEXT_EXTENSIONS = {
    ".txt", ".md", ".rs", ".js", ".ts", ".py", ".go", ".java", ".cpp", ".c", ".h",
    ".css", ".html", ".xml", ".json", ".yaml", ".yml", ".toml", ".ini", ".cfg",
}


class WriteArgs(BaseModel):
    file_path: str = Field(description="Absolute path to the file to create/write")
    content: str = Field(description="Content to write to the file")
    overwrite: bool = Field(default=False, description="Whether to overwrite existing files")


def normalize_content(content: str, path: Path) -> str:
    normalized = content.replace("\r\n", "\n")
    if path.suffix.lower() in TEXT_EXTENSIONS and not normalized.endswith("\n"):
        normalized += "\n"
    return normalized


def preview(content: str) -> str:
    lines = content.splitlines()
    if len(lines) <= 20:
        body = "".join(f"{i:3}│ {line}\n" for i, line in enumerate(lines, start=1))
        return f"Content preview:\n{body}"
    body = "".join(f"{i:3}│ {line}\n" for i, line in enumerate(lines[:10], start=1))
    return f"Content preview (first 10 lines):\n{body}    ... {len(lines) - 10} more lines"


class WriteTool(Tool):
    name = "write"
    description = (
        "Create a new file, or replace one entirely with overwrite=true. "
        "Prefer the edit tools for changes to existing files."
    )
    args_model = WriteArgs

    async def execute(self, params: WriteArgs) -> str:
        return await asyncio.to_thread(self._write, params)

    def _write(self, params: WriteArgs) -> str:
        path = resolve_path(params.file_path)

        if not path.parent.exists():
            raise ValidationError(
                f"Parent directory does not exist: {path.parent}. "
                "Create it first or provide a valid path."
            )
        path_str = str(path)
        for protected in PROTECTED_DIRECTORIES:
            if protected in path_str:
                raise ValidationError(
                    f"Refusing to write to system directory: {path}. "
                    "For safety, only write to project directories."
                )

        if path.exists():
            if not params.overwrite:
                raise ValidationError(
                    f"File already exists: {path}. Read it first and use the edit tool, "
                    "or set overwrite=true to replace it entirely."
                )
            if path.name.lower() in IMPORTANT_FILES:
                LOGGER.warning(f"Overwriting important file: {path}")

        content = normalize_content(params.content, path)
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise CapabilityExecutionError(f"Failed to write file {path}: {e}") from e

        lines = len(content.splitlines())
        words = len(content.split())
        size = len(content.encode("utf-8"))
        LOGGER.info(f"File written successfully: {path}")
        return (
            f"Successfully wrote file: {path}\n"
            f"Stats: {lines} lines, {words} words, {size} bytes\n\n"
            f"{preview(content)}"
        )

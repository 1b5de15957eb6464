"""Grep tool: ripgrep (or grep -r) run in a worker thread."""

from __future__ import annotations

import asyncio
import logging
import shutil
import subprocess
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from fileAgent.tools.paths import resolve_path
from shared.capabilities.base import Tool
from shared.errors import CapabilityExecutionError, ValidationError

LOGGER = logging.getLogger(__name__)

TYPE_EXTENSIONS = {
    "js": ["js", "jsx", "mjs"],
    "ts": ["ts", "tsx"],
    "py": ["py", "pyx", "pyi"],
    "rust": ["rs"],
    "go": ["go"],
    "java": ["java"],
    "cpp": ["cpp", "cc", "cxx", "hpp", "hh", "hxx"],
    "c": ["c", "h"],
    "css": ["css", "scss", "sass", "less"],
    "html": ["html", "htm"],
    "json": ["json"],
    "yaml": ["yaml", "yml"],
    "md": ["md", "markdown"],
    "txt": ["txt"],
}

SEARCH_TIMEOUT_SECONDS = 60


class GrepArgs(BaseModel):
    pattern: str = Field(description="Regular expression to search for")
    path: Optional[str] = Field(default=None, description="File or directory to search in")
    glob: Optional[str] = Field(default=None, description="Glob filter, e.g. '*.py'")
    type: Optional[str] = Field(default=None, description="File type filter, e.g. 'py', 'js'")
    output_mode: Literal["content", "files_with_matches", "count"] = Field(
        default="files_with_matches",
        description="content: matching lines; files_with_matches: paths; count: per-file counts",
    )
    case_insensitive: bool = Field(default=False, description="Case insensitive search")
    line_numbers: bool = Field(default=False, description="Show line numbers (content mode)")
    context_before: Optional[int] = Field(default=None, ge=0, description="Lines before each match")
    context_after: Optional[int] = Field(default=None, ge=0, description="Lines after each match")
    context_around: Optional[int] = Field(default=None, ge=0, description="Lines around each match")
    head_limit: Optional[int] = Field(default=None, ge=1, description="Max matches per file")
    multiline: bool = Field(default=False, description="Let patterns span lines")


def ripgrep_command(binary: str, params: GrepArgs, target: str) -> List[str]:
    cmd = [binary, "--no-heading", "--color", "never"]
    if params.case_insensitive:
        cmd.append("-i")
    if params.output_mode == "content":
        if params.line_numbers:
            cmd.append("-n")
        if params.context_before is not None:
            cmd.append(f"-B{params.context_before}")
        if params.context_after is not None:
            cmd.append(f"-A{params.context_after}")
        if params.context_around is not None:
            cmd.append(f"-C{params.context_around}")
    elif params.output_mode == "files_with_matches":
        cmd.append("-l")
    else:
        cmd.append("-c")
    for ext in TYPE_EXTENSIONS.get(params.type or "", []):
        cmd.extend(["--glob", f"*.{ext}"])
    if params.glob:
        cmd.extend(["--glob", params.glob])
    if params.multiline:
        cmd.extend(["-U", "--multiline-dotall"])
    if params.head_limit:
        cmd.extend(["--max-count", str(params.head_limit)])
    cmd.extend(["-e", params.pattern, target])
    return cmd


def grep_command(params: GrepArgs, target: str) -> List[str]:
    cmd = ["grep", "-r", "-E"]
    if params.case_insensitive:
        cmd.append("-i")
    if params.output_mode == "content":
        if params.line_numbers:
            cmd.append("-n")
        if params.context_before is not None:
            cmd.append(f"-B{params.context_before}")
        if params.context_after is not None:
            cmd.append(f"-A{params.context_after}")
        if params.context_around is not None:
            cmd.append(f"-C{params.context_around}")
    elif params.output_mode == "files_with_matches":
        cmd.append("-l")
    else:
        cmd.append("-c")
    for ext in TYPE_EXTENSIONS.get(params.type or "", []):
        cmd.append(f"--include=*.{ext}")
    if params.glob:
        cmd.append(f"--include={params.glob}")
    if params.head_limit:
        cmd.extend(["-m", str(params.head_limit)])
    cmd.extend(["-e", params.pattern, target])
    return cmd


class GrepTool(Tool):
    name = "grep"
    description = (
        "Search file contents with a regular expression. Supports file filters, "
        "context lines and three output modes."
    )
    args_model = GrepArgs

    async def execute(self, params: GrepArgs) -> str:
        return await asyncio.to_thread(self._search, params)

    def _search(self, params: GrepArgs) -> str:
        target = resolve_path(params.path)
        if not target.exists():
            raise ValidationError(f"Path does not exist: {params.path}")

        binary = shutil.which("rg")
        if binary:
            cmd = ripgrep_command(binary, params, str(target))
        else:
            LOGGER.debug("ripgrep not found, falling back to grep -r")
            cmd = grep_command(params, str(target))

        try:
            completed = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=SEARCH_TIMEOUT_SECONDS,
            )
        except subprocess.TimeoutExpired as e:
            raise CapabilityExecutionError(
                f"Search timed out after {SEARCH_TIMEOUT_SECONDS}s"
            ) from e
        except OSError as e:
            raise CapabilityExecutionError(f"Failed to run search: {e}") from e

        if completed.returncode == 1 or (completed.returncode == 0 and not completed.stdout.strip()):
            return f"No matches found for pattern: {params.pattern}"
        if completed.returncode != 0:
            raise CapabilityExecutionError(
                f"Search failed (exit code {completed.returncode}): {completed.stderr.strip()}"
            )
        return completed.stdout.rstrip("\n")

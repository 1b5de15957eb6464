"""Shell command tool with a best-effort denylist."""

from __future__ import annotations

import asyncio
import logging
import os
import re
import subprocess
import time
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field

from shared.capabilities.base import Tool
from shared.errors import CapabilityExecutionError, ValidationError

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 120_000
MAX_TIMEOUT_MS = 600_000

FORBIDDEN_COMMANDS = (
    "rm -rf /",
    "rm -rf /*",
    ":(){ :|:& };:",
    "mv / /dev/null",
    "dd if=/dev/zero",
    "mkfs",
    "fdisk",
    "format c:",
    "shutdown",
    "reboot",
    "halt",
    "poweroff",
    "init 0",
    "init 6",
    "chmod -r 777 /",
    "chown -r root /",
    "killall -9",
)

RISKY_PATTERNS = ("rm -rf", "rm -r", "sudo ", "> /dev/", "curl | sh", "wget | sh", "eval ")

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


class BashArgs(BaseModel):
    command: str = Field(description="The command to execute")
    description: Optional[str] = Field(
        default=None, description="Short description of what the command does"
    )
    timeout_ms: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        ge=1,
        le=MAX_TIMEOUT_MS,
        description="Timeout in milliseconds (max 600000)",
    )


def validate_command(command: str) -> None:
    lowered = command.lower()
    for forbidden in FORBIDDEN_COMMANDS:
        if forbidden in lowered:
            raise ValidationError(
                f"Forbidden command detected: '{forbidden}'. This command could cause system damage."
            )
    for risky in RISKY_PATTERNS:
        if risky in lowered:
            LOGGER.warning(f"Risky command pattern detected: '{risky}' in command: {command}")


def safe_environment() -> Dict[str, str]:
    env = {"SHELL": "/bin/sh", "TERM": "xterm"}
    for key in ("PATH", "HOME", "USER", "LANG"):
        value = os.environ.get(key)
        if value:
            env[key] = value
    env.setdefault("PATH", "/usr/bin:/bin:/usr/sbin:/sbin")
    return env


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE.sub("", text)


class BashTool(Tool):
    name = "bash"
    description = (
        "Run a shell command. Prefer the file tools for reading and editing files; "
        "use this for builds, tests and system utilities."
    )
    args_model = BashArgs

    async def execute(self, params: BashArgs) -> str:
        validate_command(params.command)
        return await asyncio.to_thread(self._run, params)

    def _run(self, params: BashArgs) -> str:
        cwd = Path.cwd()
        LOGGER.info(f"Bash executing: {params.description or 'command'} - {params.command}")
        started = time.monotonic()
        try:
            completed = subprocess.run(
                ["sh", "-c", params.command],
                cwd=cwd,
                env=safe_environment(),
                capture_output=True,
                text=True,
                errors="replace",
                timeout=params.timeout_ms / 1000,
            )
        except subprocess.TimeoutExpired as e:
            raise CapabilityExecutionError(
                f"Command timed out after {params.timeout_ms}ms: {params.command}"
            ) from e
        except OSError as e:
            raise CapabilityExecutionError(
                f"Failed to execute command '{params.command}': {e}"
            ) from e
        elapsed = time.monotonic() - started

        lines = [f"Command: {params.command}"]
        if params.description:
            lines.append(f"Description: {params.description}")
        lines.append(f"Working Directory: {cwd}")
        lines.append(f"Execution Time: {elapsed:.2f}s")
        lines.append(f"Exit Code: {completed.returncode}")
        stdout = strip_ansi(completed.stdout).rstrip()
        stderr = strip_ansi(completed.stderr).rstrip()
        if stdout:
            lines.append(f"\nSTDOUT:\n{stdout}")
        if stderr:
            lines.append(f"\nSTDERR:\n{stderr}")
        if not stdout and not stderr:
            lines.append("\n(no output)")
        return "\n".join(lines)

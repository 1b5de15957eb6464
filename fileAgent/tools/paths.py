"""Path helpers shared by the file tools."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from shared.errors import ValidationError


def resolve_path(path: Optional[str]) -> Path:
    """Absolute paths are used as-is; relative ones are joined to the cwd."""
    if not path:
        return Path.cwd()
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = Path.cwd() / candidate
    return candidate


def resolve_directory(path: Optional[str]) -> Path:
    directory = resolve_path(path)
    if not directory.exists():
        raise ValidationError(f"Path does not exist: {path}")
    if not directory.is_dir():
        raise ValidationError(f"Path is not a directory: {path}")
    return directory


def is_binary(path: Path, probe: int = 1024) -> bool:
    """A NUL byte in the first ``probe`` bytes marks the file as binary."""
    try:
        with open(path, "rb") as f:
            return b"\0" in f.read(probe)
    except OSError:
        return False


def format_size(size: int) -> str:
    units = ["B", "KB", "MB", "GB", "TB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    if index == 0:
        return f"{size} B"
    return f"{value:.1f} {units[index]}"

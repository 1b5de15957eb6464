"""Context compactor for capability results.

Shrinks tool output before it is fed back to the reasoning engine:

1. Shape-specific compaction keyed by capability name (search, file, listing).
2. A flat character cap applied to every result afterwards.

Both steps are pure: they derive a new string and never touch stored state.
"""

from __future__ import annotations

import enum
import logging
import re
from typing import Dict, List, Mapping, Optional, Tuple

from shared.config.settings import ContextSettings

LOGGER = logging.getLogger(__name__)


class ResultShape(enum.Enum):
    SEARCH = "search"
    FILE = "file"
    LISTING = "listing"
    OTHER = "other"


DEFAULT_SHAPES: Dict[str, ResultShape] = {
    "grep": ResultShape.SEARCH,
    "read": ResultShape.FILE,
    "ls": ResultShape.LISTING,
    "glob": ResultShape.LISTING,
}

ELISION_MARKER = "... [TRUNCATED] ..."


# Content lines of the read tool: right-aligned line number, then an arrow
NUMBERED_LINE = re.compile(r"^\s*\d+→")


def count_sources(lines: List[str]) -> int:
    """Distinct sources of search lines.

    ``path:rest`` lines count their ``path`` prefix; a bare line (files-only
    output) is itself the path.
    """
    sources = set()
    for line in lines:
        if not line.strip():
            continue
        head, _, _ = line.partition(":")
        sources.add(head)
    return len(sources)


def split_numbered(lines: List[str]) -> Tuple[List[str], List[str], List[str]]:
    """Split read output into (header, numbered content, footer).

    Output with no numbered lines is treated as all content.
    """
    indexes = [i for i, line in enumerate(lines) if NUMBERED_LINE.match(line)]
    if not indexes:
        return [], lines, []
    first, last = indexes[0], indexes[-1]
    return lines[:first], lines[first:last + 1], lines[last + 1:]


class ContextCompactor:
    """Applies the compaction policy for one result at a time."""

    def __init__(
        self,
        settings: Optional[ContextSettings] = None,
        shapes: Optional[Mapping[str, ResultShape]] = None,
    ):
        self.settings = settings or ContextSettings()
        self.shapes = dict(DEFAULT_SHAPES if shapes is None else shapes)

    def shape_of(self, capability_name: str) -> ResultShape:
        return self.shapes.get(capability_name, ResultShape.OTHER)

    def compact(self, capability_name: str, text: str) -> str:
        """Shape compaction followed by the flat character cap."""
        shape = self.shape_of(capability_name)
        if shape is ResultShape.SEARCH:
            shaped = self.compact_search(text)
        elif shape is ResultShape.FILE:
            shaped = self.compact_file(text)
        elif shape is ResultShape.LISTING:
            shaped = self.compact_listing(capability_name, text)
        else:
            shaped = text

        if shaped is not text:
            LOGGER.debug(
                f"Compacted {capability_name} result: {len(text)} -> {len(shaped)} chars"
            )
        return self.truncate(shaped)

    # ========== Shape compaction ==========

    def compact_search(self, text: str) -> str:
        lines = text.splitlines()
        if len(lines) <= self.settings.search_threshold:
            return text

        head = self.settings.head_lines
        tail = self.settings.tail_lines
        return (
            f"Found {len(lines)} matches across {count_sources(lines)} files.\n\n"
            f"First {head} matches:\n" + "\n".join(lines[:head]) + "\n\n"
            f"{ELISION_MARKER}\n\n"
            f"Last {tail} matches:\n" + "\n".join(lines[-tail:])
        )

    def compact_file(self, text: str) -> str:
        """Sample a large file as three windows.

        Only the file's own lines count toward the threshold; a descriptive
        header above them is kept verbatim on top of the preview.
        """
        header, lines, _ = split_numbered(text.splitlines())
        total = len(lines)
        if total <= self.settings.read_threshold:
            return text

        window = self.settings.window_lines
        middle = total // 2
        middle_start = max(middle - window // 2, 0)
        end_start = max(total - window, 0)

        def section(start: int) -> str:
            return "\n".join(lines[start:start + window])

        prefix = "\n".join(header).rstrip("\n")
        return (
            (f"{prefix}\n\n" if prefix else "")
            + f"=== FILE PREVIEW (Large file: {total} lines) ===\n\n"
            f"BEGINNING (lines 1-{min(window, total)}):\n{section(0)}\n\n"
            f"MIDDLE (around line {middle}, starting at line {middle_start + 1}):\n"
            f"{section(middle_start)}\n\n"
            f"END (last {window} lines, starting at line {end_start + 1}):\n{section(end_start)}"
        )

    def compact_listing(self, capability_name: str, text: str) -> str:
        lines = text.splitlines()
        if len(lines) <= self.settings.listing_threshold:
            return text

        head = self.settings.head_lines
        tail = self.settings.tail_lines
        noun = "files" if capability_name == "glob" else "items"
        title = (
            f"Found {len(lines)} matching files:"
            if capability_name == "glob"
            else f"Large directory listing ({len(lines)} items):"
        )
        return (
            f"{title}\n\n"
            f"First {head} {noun}:\n" + "\n".join(lines[:head]) + "\n\n"
            f"{ELISION_MARKER}\n\n"
            f"Last {tail} {noun}:\n" + "\n".join(lines[-tail:])
        )

    # ========== Flat cap ==========

    def truncate(self, text: str) -> str:
        """Cut ``text`` to ``tool_output_limit`` characters.

        Slicing a ``str`` counts code points, so the cut never splits a character.
        """
        limit = self.settings.tool_output_limit
        if len(text) <= limit:
            return text
        removed = len(text) - limit
        return f"{text[:limit]}\n... [TRUNCATED - {removed} characters removed of {len(text)} total]"

"""Edit tools: single exact-match replacement and atomic batches."""

from __future__ import annotations

import asyncio
import logging
from typing import List

from pydantic import BaseModel, Field

from fileAgent.editing.engine import (
    MAX_EDITS_PER_CALL,
    EditOperation,
    edit_file,
    multi_edit_file,
)
from shared.capabilities.base import Tool

LOGGER = logging.getLogger(__name__)


class EditArgs(BaseModel):
    file_path: str = Field(description="Absolute path to the file to modify")
    old_string: str = Field(
        description="Exact text to replace (must be unique in file unless replace_all=true)"
    )
    new_string: str = Field(description="Text to replace it with")
    replace_all: bool = Field(default=False, description="Replace all occurrences of old_string")


class EditItem(BaseModel):
    old_string: str = Field(description="Text to replace")
    new_string: str = Field(description="Text to replace it with")
    replace_all: bool = Field(default=False, description="Replace all occurrences")


class MultiEditArgs(BaseModel):
    file_path: str = Field(description="Absolute path to the file to modify")
    edits: List[EditItem] = Field(
        description="Edit operations applied in order, each to the previous result",
    )


def context_around(content: str, start: int, context_lines: int = 2) -> str:
    lines = content.splitlines()
    match_line = content.count("\n", 0, start)
    first = max(match_line - context_lines, 0)
    last = min(match_line + context_lines + 1, len(lines))
    rendered = []
    for index in range(first, last):
        marker = "→" if index == match_line else " "
        rendered.append(f"{index + 1:4}{marker} {lines[index]}\n")
    return "".join(rendered)


def change_summary(original: str, final: str, max_changes: int = 10) -> str:
    before = original.splitlines()
    after = final.splitlines()
    parts = ["Change Summary:\n"]
    shown = 0
    for number, (old_line, new_line) in enumerate(zip(before, after), start=1):
        if old_line == new_line:
            continue
        if shown == max_changes:
            parts.append("  ... (additional changes not shown)\n")
            break
        parts.append(f"  Line {number}:\n  - {old_line}\n  + {new_line}\n\n")
        shown += 1
    delta = len(after) - len(before)
    if delta > 0:
        parts.append(f"  {delta} lines added\n")
    elif delta < 0:
        parts.append(f"  {-delta} lines removed\n")
    return "".join(parts)


class EditTool(Tool):
    name = "edit"
    description = (
        "Precise string replacement with verification. Read the file first; "
        "old_string must match exactly, including whitespace."
    )
    args_model = EditArgs

    async def execute(self, params: EditArgs) -> str:
        operation = EditOperation(params.old_string, params.new_string, params.replace_all)
        path, original, outcome = await asyncio.to_thread(edit_file, params.file_path, operation)

        plural = "" if outcome.replacements == 1 else "s"
        first = outcome.matches[0]
        old_preview = params.old_string.replace("\n", "\\n")
        new_preview = params.new_string.replace("\n", "\\n")
        return (
            f"Successfully edited file: {path}\n"
            f"Made {outcome.replacements} replacement{plural}\n\n"
            f"Change made around line {first.line_number}:\n"
            f"{context_around(original, first.start)}"
            "\nPreview of change:\n"
            f"- {old_preview}\n"
            f"+ {new_preview}\n"
        )


class MultiEditTool(Tool):
    name = "multi_edit"
    description = (
        "Apply several edits to one file atomically: all succeed or the file is left untouched."
    )
    args_model = MultiEditArgs

    def __init__(self, max_edits: int = MAX_EDITS_PER_CALL):
        self.max_edits = max_edits

    async def execute(self, params: MultiEditArgs) -> str:
        operations = [
            EditOperation(item.old_string, item.new_string, item.replace_all)
            for item in params.edits
        ]
        path, original, final, counts = await asyncio.to_thread(
            multi_edit_file, params.file_path, operations, self.max_edits
        )

        results = "".join(
            f"  • Edit #{i}: {count} replacement{'' if count == 1 else 's'}\n"
            for i, count in enumerate(counts, start=1)
        )
        orig_lines = len(original.splitlines())
        new_lines = len(final.splitlines())
        orig_bytes = len(original.encode("utf-8"))
        new_bytes = len(final.encode("utf-8"))
        return (
            f"Successfully applied {len(operations)} edits to: {path}\n"
            f"Total replacements made: {sum(counts)}\n\n"
            f"Edit Results:\n{results}\n"
            f"{change_summary(original, final)}"
            "File Statistics:\n"
            f"- Lines: {orig_lines} -> {new_lines} ({new_lines - orig_lines:+})\n"
            f"- Size: {orig_bytes} -> {new_bytes} bytes ({new_bytes - orig_bytes:+})\n"
        )

"""Exact-match text replacement with postcondition verification.

``apply_edit`` and ``apply_edits`` are pure: they take content and return new
content. ``edit_file`` and ``multi_edit_file`` add the file boundary and write
the result once, only after every check has passed. A failed batch never
touches the file.

Matches are located by a sequential scan that resumes one character past each
match start, so overlapping occurrences are all counted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

from fileAgent.tools.paths import resolve_path
from shared.errors import (
    AmbiguousMatch,
    EditError,
    EmptyPattern,
    MultiEditFailed,
    NoOpEdit,
    NotFound,
    PostconditionFailed,
    TooManyEdits,
    ValidationError,
)

LOGGER = logging.getLogger(__name__)

MAX_EDITS_PER_CALL = 50

# Edits touching these are logged at WARNING
STRUCTURAL_MARKERS = (
    "import ",
    "use ",
    "fn main",
    "class ",
    "def __init__",
    "package ",
    "module.exports",
    "export default",
)


@dataclass(frozen=True)
class EditOperation:
    old_string: str
    new_string: str
    replace_all: bool = False


@dataclass(frozen=True)
class MatchSpan:
    start: int
    end: int
    line_number: int


@dataclass(frozen=True)
class EditOutcome:
    """Result of one in-memory edit."""

    content: str
    replacements: int
    matches: Tuple[MatchSpan, ...]


def find_matches(content: str, pattern: str) -> List[MatchSpan]:
    """Locate every occurrence of ``pattern`` with its 1-based line number."""
    if not pattern:
        return []
    spans: List[MatchSpan] = []
    line_number = 1
    counted_to = 0
    pos = content.find(pattern)
    while pos != -1:
        line_number += content.count("\n", counted_to, pos)
        counted_to = pos
        spans.append(MatchSpan(pos, pos + len(pattern), line_number))
        pos = content.find(pattern, pos + 1)
    return spans


def validate_operation(operation: EditOperation) -> None:
    if not operation.old_string:
        raise EmptyPattern()
    if operation.old_string == operation.new_string:
        raise NoOpEdit()
    for marker in STRUCTURAL_MARKERS:
        if marker in operation.old_string or marker in operation.new_string:
            LOGGER.warning(f"Edit affects important code structure: {marker.strip()}")


def apply_edit(content: str, operation: EditOperation) -> EditOutcome:
    """Apply one operation to ``content`` and verify the result.

    Raises:
        EmptyPattern, NoOpEdit: invalid operation
        NotFound: ``old_string`` does not occur
        AmbiguousMatch: several occurrences while ``replace_all`` is off
        PostconditionFailed: re-scan of the candidate content disagrees
    """
    validate_operation(operation)
    old, new = operation.old_string, operation.new_string

    matches = find_matches(content, old)
    if not matches:
        raise NotFound(old)
    if not operation.replace_all and len(matches) > 1:
        raise AmbiguousMatch(old, [m.line_number for m in matches])

    if operation.replace_all:
        replacements = content.count(old)
        candidate = content.replace(old, new)
    else:
        replacements = 1
        candidate = content.replace(old, new, 1)

    remaining = len(find_matches(candidate, old))
    if operation.replace_all:
        if remaining:
            raise PostconditionFailed(
                f"replace_all failed: {remaining} instances of old_string still remain"
            )
    elif remaining != len(matches) - 1:
        raise PostconditionFailed(
            f"Unexpected number of replacements made: expected {len(matches) - 1} "
            f"remaining occurrence(s) of old_string, found {remaining}"
        )

    return EditOutcome(candidate, replacements, tuple(matches))


def warn_on_conflicts(operations: Sequence[EditOperation]) -> None:
    for i, first in enumerate(operations):
        for j in range(i + 1, len(operations)):
            second = operations[j]
            if first.old_string in second.old_string or second.old_string in first.old_string:
                LOGGER.warning(
                    f"Potential conflict between edit #{i + 1} and #{j + 1}: overlapping old_strings"
                )
            if second.old_string in first.new_string:
                LOGGER.warning(
                    f"Potential conflict: edit #{i + 1} creates text that edit #{j + 1} will modify"
                )


def validate_batch(operations: Sequence[EditOperation], limit: int = MAX_EDITS_PER_CALL) -> None:
    if not operations:
        raise ValidationError("No edits provided")
    if len(operations) > limit:
        raise TooManyEdits(len(operations), limit)
    for index, operation in enumerate(operations, start=1):
        if not operation.old_string:
            raise ValidationError(f"Edit #{index}: old_string cannot be empty")
        if operation.old_string == operation.new_string:
            raise ValidationError(f"Edit #{index}: old_string and new_string are identical")
    warn_on_conflicts(operations)


def apply_edits(
    content: str,
    operations: Sequence[EditOperation],
    limit: int = MAX_EDITS_PER_CALL,
) -> Tuple[str, List[int]]:
    """Apply ``operations`` in order, each against the previous result.

    Returns the final content and the replacement count of each operation.

    Raises:
        ValidationError, TooManyEdits: the batch failed up-front validation
        MultiEditFailed: one operation failed; carries its 1-based index
    """
    validate_batch(operations, limit)
    counts: List[int] = []
    current = content
    for index, operation in enumerate(operations, start=1):
        try:
            outcome = apply_edit(current, operation)
        except EditError as e:
            LOGGER.error(f"Multi-edit failed at edit #{index}: {e}")
            raise MultiEditFailed(index, e) from e
        current = outcome.content
        counts.append(outcome.replacements)
    return current, counts


# ========== File boundary ==========

def resolve_existing_file(file_path: str) -> Path:
    path = resolve_path(file_path)
    if not path.exists():
        raise ValidationError(
            f"File does not exist: {file_path}. Use write tool to create new files."
        )
    if not path.is_file():
        raise ValidationError(f"Path is not a file: {file_path}")
    return path


def read_text(path: Path) -> str:
    # newline="" keeps CRLF intact so the rewrite is byte-faithful
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def edit_file(file_path: str, operation: EditOperation) -> Tuple[Path, str, EditOutcome]:
    """Edit one file in place. Returns (path, original content, outcome)."""
    path = resolve_existing_file(file_path)
    original = read_text(path)
    outcome = apply_edit(original, operation)
    write_text(path, outcome.content)
    LOGGER.info(f"File edited successfully: {path} ({outcome.replacements} replacements)")
    return path, original, outcome


def multi_edit_file(
    file_path: str,
    operations: Sequence[EditOperation],
    limit: int = MAX_EDITS_PER_CALL,
) -> Tuple[Path, str, str, List[int]]:
    """Apply a batch to one file with a single write. Returns (path, original, final, counts)."""
    validate_batch(operations, limit)
    path = resolve_existing_file(file_path)
    original = read_text(path)
    final, counts = apply_edits(original, operations, limit)
    write_text(path, final)
    LOGGER.info(
        f"Multi-edit completed successfully: {path} "
        f"({len(operations)} edits, {sum(counts)} replacements)"
    )
    return path, original, final, counts

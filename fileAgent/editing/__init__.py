"""Text mutation engine used by the edit tools."""

from .engine import (
    MAX_EDITS_PER_CALL,
    EditOperation,
    EditOutcome,
    MatchSpan,
    apply_edit,
    apply_edits,
    edit_file,
    find_matches,
    multi_edit_file,
    validate_batch,
)

__all__ = [
    "MAX_EDITS_PER_CALL",
    "EditOperation",
    "EditOutcome",
    "MatchSpan",
    "apply_edit",
    "apply_edits",
    "edit_file",
    "find_matches",
    "multi_edit_file",
    "validate_batch",
]

"""Exception hierarchy shared by the drivers, the dispatcher and the tools.

Errors fall in two groups:

- Fatal: ``TransportError`` and ``ContractViolation`` abort the task that raised them.
- Soft: everything raised by a capability is caught by the dispatcher and fed back
  to the reasoning engine as a tool result, so the engine can retry or adapt.
"""

from __future__ import annotations

from typing import List, Optional


class AgentError(Exception):
    """Base exception for agent errors."""

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


class TransportError(AgentError):
    """The reasoning engine could not be reached or answered with a failure."""
    pass


class ContractViolation(AgentError):
    """A programming contract was broken (duplicate names, duplicate ids)."""
    pass


class CapabilityNotFound(AgentError):
    """A tool call named a capability that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Capability not found: {name}")
        self.name = name


class CapabilityExecutionError(AgentError):
    """A capability ran but could not complete its work."""
    pass


class ValidationError(AgentError):
    """Capability arguments were malformed or violate a precondition."""
    pass


# ========== Text mutation errors ==========

class EditError(ValidationError):
    """Base class for edit contract failures."""
    pass


class EmptyPattern(EditError):
    def __init__(self) -> None:
        super().__init__("old_string cannot be empty")


class NoOpEdit(EditError):
    def __init__(self) -> None:
        super().__init__("old_string and new_string are identical - no changes needed")


class NotFound(EditError):
    def __init__(self, old_string: str):
        super().__init__(
            f"old_string not found in file: '{old_string}'\n"
            "Make sure the string matches exactly, including whitespace and indentation."
        )
        self.old_string = old_string


class AmbiguousMatch(EditError):
    """``old_string`` occurs more than once and ``replace_all`` is off."""

    def __init__(self, old_string: str, line_numbers: List[int]):
        lines = ", ".join(str(n) for n in line_numbers)
        super().__init__(
            f"old_string '{old_string}' found {len(line_numbers)} times in file. Either:\n"
            "1. Provide more context to make it unique, or\n"
            "2. Set replace_all=true to replace all occurrences\n\n"
            f"Found at lines: {lines}"
        )
        self.old_string = old_string
        self.line_numbers = list(line_numbers)


class PostconditionFailed(EditError):
    """The candidate content failed the post-replacement re-scan."""
    pass


class TooManyEdits(EditError):
    def __init__(self, count: int, limit: int):
        super().__init__(
            f"Too many edits ({count}). Maximum {limit} edits per operation for safety."
        )
        self.count = count
        self.limit = limit


class MultiEditFailed(EditError):
    """One operation of a batch failed; nothing was written."""

    def __init__(self, index: int, cause: EditError):
        super().__init__(
            f"Multi-edit failed at edit #{index}: {cause}\n"
            "All changes have been rolled back. No modifications made to the file."
        )
        self.index = index
        self.cause = cause


__all__ = [
    "AgentError",
    "TransportError",
    "ContractViolation",
    "CapabilityNotFound",
    "CapabilityExecutionError",
    "ValidationError",
    "EditError",
    "EmptyPattern",
    "NoOpEdit",
    "NotFound",
    "AmbiguousMatch",
    "PostconditionFailed",
    "TooManyEdits",
    "MultiEditFailed",
]

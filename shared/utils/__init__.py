"""Shared utilities."""

from .logging_utils import (
    log_error,
    log_round,
    log_tool_call,
    log_tool_result,
    setup_logging,
    summarize_record,
)

__all__ = [
    "log_error",
    "log_round",
    "log_tool_call",
    "log_tool_result",
    "setup_logging",
    "summarize_record",
]

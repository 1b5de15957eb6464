"""Audit sink and per-task session."""

from .session import (
    AuditSession,
    AuditSink,
    FileAuditSink,
    MemoryAuditSink,
    message_filename,
)

__all__ = [
    "AuditSession",
    "AuditSink",
    "FileAuditSink",
    "MemoryAuditSink",
    "message_filename",
]

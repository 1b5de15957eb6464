"""Runtime assembly for the orchestrator."""

from .app import build_orchestrator, process_message, process_message_sync

__all__ = ["build_orchestrator", "process_message", "process_message_sync"]

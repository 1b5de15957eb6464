"""Per-task audit session: an append-only sink plus its sequence counter.

Every reasoning-engine response and every capability call is written to the sink,
addressed by source name and a monotonically increasing sequence number. The
session is created once per process and passed explicitly to the drivers;
``start_task()`` wipes the sink and resets the counter.

Scope limitation: one task in flight per session. Two tasks sharing a session
would interleave sequence numbers and the second ``start_task()`` would wipe the
first task's records.
"""

from __future__ import annotations

import json
import logging
import shutil
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Tuple

from shared.config.settings import AuditSettings
from shared.utils.logging_utils import summarize_record

LOGGER = logging.getLogger(__name__)

# Directories recreated after every wipe
DEFAULT_SOURCES = ("orchestrator", "file_agent")


class AuditSink(Protocol):
    """Append-only destination for audit records."""

    def write(self, source: str, sequence: int, record: Dict[str, Any]) -> None:
        ...

    def clear(self) -> None:
        ...


def message_filename(source: str, sequence: int) -> str:
    return f"{sequence:03d}_{source}_message.json"


class FileAuditSink:
    """Writes each record as pretty JSON under ``<root>/messages/<source>/``."""

    def __init__(self, root: Path | str, sources: Tuple[str, ...] = DEFAULT_SOURCES):
        self.root = Path(root)
        self.sources = sources

    @property
    def messages_dir(self) -> Path:
        return self.root / "messages"

    def clear(self) -> None:
        if self.root.exists():
            shutil.rmtree(self.root)
            LOGGER.info(f"Cleared audit directory: {self.root}")
        for source in self.sources:
            (self.messages_dir / source).mkdir(parents=True, exist_ok=True)

    def write(self, source: str, sequence: int, record: Dict[str, Any]) -> None:
        directory = self.messages_dir / source
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / message_filename(source, sequence)
        path.write_text(
            json.dumps(record, indent=2, ensure_ascii=False, default=str),
            encoding="utf-8",
        )
        LOGGER.debug(f"Stored {source} audit record: {path.name} ({summarize_record(record)})")


class MemoryAuditSink:
    """Keeps records in a list; used by tests and when auditing is disabled."""

    def __init__(self) -> None:
        self.entries: List[Tuple[int, str, Dict[str, Any]]] = []

    def clear(self) -> None:
        self.entries.clear()

    def write(self, source: str, sequence: int, record: Dict[str, Any]) -> None:
        self.entries.append((sequence, source, record))

    def sources(self) -> List[str]:
        return [source for _, source, _ in self.entries]


class AuditSession:
    """Explicit per-process audit context handed to every driver."""

    def __init__(self, sink: Optional[AuditSink] = None):
        self.sink: AuditSink = sink if sink is not None else MemoryAuditSink()
        self._counter = 1
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: AuditSettings) -> "AuditSession":
        if not settings.enabled:
            return cls(MemoryAuditSink())
        return cls(FileAuditSink(settings.root_dir))

    def start_task(self) -> None:
        """Wipe the sink and reset the sequence counter for a new task."""
        with self._lock:
            self._counter = 1
        try:
            self.sink.clear()
        except OSError as e:
            LOGGER.warning(f"Failed to clear audit sink: {e}")

    def next_sequence(self) -> int:
        with self._lock:
            value = self._counter
            self._counter += 1
            return value

    def write(self, source: str, record: Dict[str, Any]) -> int:
        """Append a record and return the sequence number it was stored under."""
        sequence = self.next_sequence()
        try:
            self.sink.write(source, sequence, record)
        except OSError as e:
            LOGGER.warning(f"Failed to store audit record {sequence} for {source}: {e}")
        return sequence

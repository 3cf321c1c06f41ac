"""In-memory appender retaining the latest delivered entries."""

from __future__ import annotations

from pathlib import Path

from lib_log_dispatch.application.ports.appender import AppenderPort
from lib_log_dispatch.domain.entries import LogEntry
from lib_log_dispatch.domain.ring_buffer import RingBuffer


class RingBufferAppender(AppenderPort):
    """Keep the most recent entries; ``flush`` writes the JSON-lines checkpoint.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_dispatch.domain.levels import LogLevel
    >>> appender = RingBufferAppender(max_entries=2)
    >>> for text in ('a', 'b', 'c'):
    ...     appender.log(LogEntry(datetime(2025, 1, 1, tzinfo=timezone.utc), LogLevel.INFO, 'svc', text))
    >>> [entry.message for entry in appender.entries()]
    ['b', 'c']
    """

    def __init__(
        self,
        *,
        max_entries: int = 25_000,
        checkpoint_path: Path | None = None,
        name: str = "ring_buffer",
    ) -> None:
        self.name = name
        self.buffer = RingBuffer(max_entries=max_entries, checkpoint_path=checkpoint_path)

    def log(self, entry: LogEntry) -> None:
        self.buffer.append(entry)

    def flush(self) -> None:
        self.buffer.flush()

    def entries(self) -> list[LogEntry]:
        """Return a snapshot of the retained entries, oldest first."""
        return self.buffer.snapshot()


__all__ = ["RingBufferAppender"]

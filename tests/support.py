"""Test doubles shared across the suite."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Any

from lib_log_dispatch.domain import LogEntry, LogLevel

BASE_TIME = datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    def __init__(self, now: datetime = BASE_TIME) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current


class RecordingAppender:
    """Appender remembering every delivered message and flush call."""

    def __init__(self, name: str = "recorder", journal: list[tuple[str, str]] | None = None) -> None:
        self.name = name
        self.messages: list[str] = []
        self.flush_calls = 0
        self.journal = journal
        self._lock = threading.Lock()

    def log(self, entry: LogEntry) -> None:
        with self._lock:
            self.messages.append(entry.message)
            if self.journal is not None:
                self.journal.append((self.name, entry.message))

    def flush(self) -> None:
        with self._lock:
            self.flush_calls += 1
            if self.journal is not None:
                self.journal.append((self.name, "<flush>"))


class BrokenAppender:
    """Appender whose ``log`` and ``flush`` always raise."""

    name = "broken"

    def __init__(self) -> None:
        self.attempts = 0

    def log(self, entry: LogEntry) -> None:
        self.attempts += 1
        raise ConnectionError(f"network down for {entry.message}")

    def flush(self) -> None:
        raise ConnectionError("network down")


class DiagnosticRecorder:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []
        self._lock = threading.Lock()

    def __call__(self, name: str, payload: dict[str, Any]) -> None:
        with self._lock:
            self.events.append((name, payload))

    def names(self) -> list[str]:
        with self._lock:
            return [name for name, _ in self.events]


def make_entry(index: int, *, age: timedelta = timedelta(0), message: str | None = None) -> LogEntry:
    return LogEntry(
        timestamp=BASE_TIME + timedelta(seconds=index) - age,
        level=LogLevel.INFO,
        logger_name="tests",
        message=message if message is not None else f"message-{index}",
        payload={"index": index},
    )

"""Ring buffer storing the most recent log entries.

Purpose
-------
Provide in-memory retention for recent entries so operators and tests can
inspect what the worker delivered without relying on external targets.

Contents
--------
* :class:`RingBuffer` with JSON-lines checkpointing.

System Role
-----------
Backs :class:`lib_log_dispatch.adapters.memory.RingBufferAppender`; the
checkpoint is written when that appender is flushed.
"""

from __future__ import annotations

import json
import threading
from collections import deque
from pathlib import Path
from typing import Deque

from .entries import LogEntry


class RingBuffer:
    """Fixed-size buffer retaining the most recent :class:`LogEntry` objects."""

    def __init__(self, *, max_entries: int, checkpoint_path: Path | None = None) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._checkpoint_path = checkpoint_path
        self._buffer: Deque[LogEntry] = deque(maxlen=max_entries)
        self._lock = threading.Lock()
        self._dirty = False
        if checkpoint_path and checkpoint_path.exists():
            self._load_checkpoint(checkpoint_path)

    def append(self, entry: LogEntry) -> None:
        """Append an entry to the buffer, evicting older ones if necessary."""

        with self._lock:
            self._buffer.append(entry)
            self._dirty = True

    def snapshot(self) -> list[LogEntry]:
        """Return a copy of the current buffer state."""

        with self._lock:
            return list(self._buffer)

    def flush(self) -> None:
        """Persist the buffer to the checkpoint path if configured."""
        if not self._checkpoint_path or not self._dirty:
            return
        entries = self.snapshot()
        self._checkpoint_path.parent.mkdir(parents=True, exist_ok=True)
        with self._checkpoint_path.open("w", encoding="utf-8") as fh:
            for entry in entries:
                fh.write(entry.to_json())
                fh.write("\n")
        self._dirty = False

    def _load_checkpoint(self, path: Path) -> None:
        """Hydrate the buffer from a newline-delimited JSON checkpoint."""
        try:
            with path.open("r", encoding="utf-8") as fh:
                for line in fh:
                    if not line.strip():
                        continue
                    self._buffer.append(LogEntry.from_dict(json.loads(line)))
        except FileNotFoundError:
            return


__all__ = ["RingBuffer"]

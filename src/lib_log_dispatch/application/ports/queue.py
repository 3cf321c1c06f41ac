"""Port describing the hand-off channel between producers and the worker."""

from __future__ import annotations

from typing import Protocol, Union, runtime_checkable

from lib_log_dispatch.domain.commands import ControlMessage
from lib_log_dispatch.domain.entries import LogEntry

QueueItem = Union[LogEntry, ControlMessage]


@runtime_checkable
class QueuePort(Protocol):
    """FIFO channel; ``get`` returns ``None`` once the channel was closed."""

    def put(self, item: QueueItem) -> bool:
        """Enqueue ``item`` without blocking; ``False`` once closed."""

    def get(self) -> QueueItem | None:
        """Block until the next item (or the closing sentinel) arrives."""

    def qsize(self) -> int:
        """Return the current backlog."""

    def close(self) -> bool:
        """Refuse further items and wake the consumer."""


__all__ = ["QueueItem", "QueuePort"]

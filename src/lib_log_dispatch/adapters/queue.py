"""Unbounded FIFO hand-off between producers and the dispatch worker.

Purpose
-------
Let any number of producer threads enqueue entries and control messages
without ever blocking, while the single worker blocks until work arrives.

Contents
--------
* :class:`DispatchQueue` - closable implementation of :class:`QueuePort`.

System Role
-----------
The only synchronisation point between producers and the worker. Closing is
atomic with respect to ``put``: every item accepted before :meth:`close` is
dequeued before the closing sentinel, so a flush command that was accepted
is always answered.
"""

from __future__ import annotations

import queue
import threading

from lib_log_dispatch.application.ports.queue import QueueItem, QueuePort


class DispatchQueue(QueuePort):
    """Thread-safe unbounded queue with an explicit end-of-stream.

    Examples
    --------
    >>> from lib_log_dispatch.domain import FlushCommand
    >>> channel = DispatchQueue()
    >>> command = FlushCommand()
    >>> channel.put(command)
    True
    >>> channel.qsize()
    1
    >>> channel.close()
    True
    >>> channel.put(FlushCommand())
    False
    >>> channel.get() is command
    True
    >>> channel.get() is None
    True
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[QueueItem | None] = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, item: QueueItem) -> bool:
        """Enqueue ``item``; returns ``False`` once the queue was closed."""

        with self._lock:
            if self._closed:
                return False
            self._queue.put_nowait(item)
            return True

    def get(self) -> QueueItem | None:
        """Block until the next item; ``None`` marks the end of the stream.

        The end-of-stream marker is sticky: it is put back once taken so a
        consumer started after closure stops as well.
        """

        item = self._queue.get()
        if item is None:
            self._queue.put_nowait(None)
        return item

    def qsize(self) -> int:
        """Return the number of items not yet taken by the worker."""

        size = self._queue.qsize()
        if self._closed and size:
            return size - 1
        return size

    def close(self) -> bool:
        """Refuse new items and enqueue the end-of-stream sentinel.

        Returns ``False`` when the queue was already closed.
        """

        with self._lock:
            if self._closed:
                return False
            self._closed = True
            self._queue.put_nowait(None)
            return True


__all__ = ["DispatchQueue"]

"""Background appender thread consuming the dispatch queue.

Purpose
-------
Run the single consumer that serialises delivery to every appender, keeping
producers free of I/O.

Contents
--------
* :class:`AppenderThread` - start-on-demand worker with a self-healing loop.

System Role
-----------
The thread only ends when the queue hands out its closing sentinel. Any
exception escaping the per-item handler is logged at the loop boundary and
the loop resumes with the next item; a flush command caught in such a fault is
answered with ``False`` so its caller is released.
"""

from __future__ import annotations

import threading
from typing import Callable

from lib_log_dispatch.application.ports.queue import QueueItem, QueuePort
from lib_log_dispatch.application.use_cases.diagnostics import Diagnostics
from lib_log_dispatch.domain.commands import FlushCommand
from lib_log_dispatch.errors import WorkerStartupError

ThreadFactory = Callable[..., threading.Thread]


class AppenderThread:
    """Own the lifecycle of the one worker thread of a dispatcher.

    Examples
    --------
    >>> from lib_log_dispatch.adapters.queue import DispatchQueue
    >>> from lib_log_dispatch.domain import FlushCommand
    >>> seen = []
    >>> channel = DispatchQueue()
    >>> worker = AppenderThread(queue=channel, handler=seen.append, diagnostics=Diagnostics())
    >>> worker.start()
    True
    >>> worker.start()
    False
    >>> channel.put(FlushCommand())
    True
    >>> channel.close()
    True
    >>> worker.join(timeout=5.0)
    True
    >>> len(seen), worker.active
    (1, False)
    """

    def __init__(
        self,
        *,
        queue: QueuePort,
        handler: Callable[[QueueItem], None],
        diagnostics: Diagnostics,
        thread_factory: ThreadFactory = threading.Thread,
        name: str = "lib-log-dispatch-appender",
    ) -> None:
        self._queue = queue
        self._handler = handler
        self._diagnostics = diagnostics
        self._thread_factory = thread_factory
        self._name = name
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._restart_count = 0

    @property
    def active(self) -> bool:
        """Return ``True`` while the worker thread is alive."""

        thread = self._thread
        return thread is not None and thread.is_alive()

    @property
    def is_current(self) -> bool:
        """Return ``True`` when called from the worker thread itself."""

        return self._thread is threading.current_thread()

    @property
    def restart_count(self) -> int:
        """Number of times the loop recovered from an internal fault."""

        return self._restart_count

    def start(self) -> bool:
        """Start the worker unless one is already alive.

        Returns ``True`` when a new thread was started.

        Raises
        ------
        WorkerStartupError
            When the thread cannot be created at all.
        """

        with self._lock:
            if self.active:
                return False
            thread = self._thread_factory(target=self._run, name=self._name, daemon=True)
            self._thread = thread
            try:
                thread.start()
            except RuntimeError as exc:
                self._thread = None
                self._diagnostics.critical("Failed to start appender thread", exc_info=exc)
                raise WorkerStartupError("Failed to start appender thread") from exc
        return True

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the worker to exit; ``True`` when it is no longer alive."""

        thread = self._thread
        if thread is None:
            return True
        if self.is_current:
            return False
        thread.join(timeout)
        return not thread.is_alive()

    def _run(self) -> None:
        """Drain the queue until closed, restarting after internal faults."""

        self._diagnostics.debug("Appender thread active")
        self._diagnostics.emit("worker_started", {"thread": threading.current_thread().name})
        try:
            while True:
                item: QueueItem | None = None
                try:
                    while True:
                        item = self._queue.get()
                        if item is None:
                            return
                        self._handler(item)
                except Exception as exc:  # noqa: BLE001
                    self._release(item)
                    self._restart_count += 1
                    self._diagnostics.error("Appender thread restarting due to exception", exc_info=exc)
                    self._diagnostics.emit(
                        "worker_restarted",
                        {"restart_count": self._restart_count, "exception": repr(exc)},
                    )
        finally:
            self._diagnostics.debug("Appender thread has stopped")
            with self._lock:
                if self._thread is threading.current_thread():
                    self._thread = None
            self._diagnostics.emit("worker_stopped", {"restart_count": self._restart_count})

    @staticmethod
    def _release(item: QueueItem | None) -> None:
        """Answer a flush command that was interrupted by a fault."""

        if isinstance(item, FlushCommand):
            item.reply.complete(False)


__all__ = ["AppenderThread", "ThreadFactory"]

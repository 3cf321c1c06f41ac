"""Dispatcher context object owning queue, registry, worker and lag state.

Purpose
-------
Bundle every piece of mutable dispatch state in one instance with an explicit
lifecycle (construct, :meth:`Dispatcher.start`, :meth:`Dispatcher.shutdown`),
so tests can run independent dispatchers side by side while the runtime
façade keeps a single process-wide one.

Contents
--------
* :class:`SystemClock` - UTC clock used by default.
* :class:`Dispatcher` - producer API, flush protocol and observability accessors.

System Role
-----------
Producers call :meth:`Dispatcher.log`; the call never blocks and starts the
worker lazily. :meth:`Dispatcher.flush` queues a flush command behind
everything already queued and blocks until the worker answered it.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Any

from lib_log_dispatch.adapters.queue import DispatchQueue
from lib_log_dispatch.adapters.worker import AppenderThread, ThreadFactory
from lib_log_dispatch.application.ports import AppenderPort, ClockPort
from lib_log_dispatch.application.use_cases import DiagnosticHook, Diagnostics, create_dispatch_handler
from lib_log_dispatch.domain import AppenderRegistry, ControlMessage, FlushCommand, LagMonitor, LogEntry
from lib_log_dispatch.domain.lag import DEFAULT_CHECK_INTERVAL, DEFAULT_THRESHOLD_SECONDS


class SystemClock(ClockPort):
    """Concrete clock port returning timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class Dispatcher:
    """Asynchronous multi-appender dispatcher.

    Examples
    --------
    >>> from lib_log_dispatch.adapters.memory import RingBufferAppender
    >>> from lib_log_dispatch.domain import LogLevel
    >>> dispatcher = Dispatcher()
    >>> memory = RingBufferAppender()
    >>> dispatcher.add_appender(memory)
    >>> dispatcher.flush()
    False
    >>> dispatcher.log(LogEntry(datetime.now(timezone.utc), LogLevel.INFO, 'svc', 'hello'))
    True
    >>> dispatcher.flush()
    True
    >>> [entry.message for entry in memory.entries()]
    ['hello']
    >>> dispatcher.shutdown()
    True
    """

    def __init__(
        self,
        *,
        appenders: list[AppenderPort] | tuple[AppenderPort, ...] = (),
        lag_check_interval: int = DEFAULT_CHECK_INTERVAL,
        lag_threshold_seconds: float = DEFAULT_THRESHOLD_SECONDS,
        autostart: bool = True,
        clock: ClockPort | None = None,
        diagnostic_logger: logging.Logger | None = None,
        diagnostic_hook: DiagnosticHook = None,
        thread_factory: ThreadFactory = threading.Thread,
    ) -> None:
        self._queue = DispatchQueue()
        self._registry = AppenderRegistry()
        for appender in appenders:
            self._registry.append(appender)
        self._lag_monitor = LagMonitor(check_interval=lag_check_interval, threshold_seconds=lag_threshold_seconds)
        self._clock = clock if clock is not None else SystemClock()
        self._diagnostics = Diagnostics(logger=diagnostic_logger, hook=diagnostic_hook)
        self._autostart = autostart
        self._dropped = 0
        self._dropped_lock = threading.Lock()
        handler = create_dispatch_handler(
            registry=self._registry,
            lag_monitor=self._lag_monitor,
            clock=self._clock,
            queue_size=self._queue.qsize,
            diagnostics=self._diagnostics,
        )
        self._worker = AppenderThread(
            queue=self._queue,
            handler=handler,
            diagnostics=self._diagnostics,
            thread_factory=thread_factory,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Start the worker thread; ``False`` if already running or shut down.

        Raises
        ------
        WorkerStartupError
            When the thread cannot be created.
        """

        if self._queue.closed:
            return False
        return self._worker.start()

    def shutdown(self, *, flush: bool = True, timeout: float | None = None) -> bool:
        """Flush (optionally), close the queue and wait for the worker to exit.

        Returns ``True`` when the worker is no longer running. ``timeout``
        bounds the whole call, flush and join together. Entries logged
        afterwards are dropped and counted in :attr:`dropped_count`.
        """

        deadline = None if timeout is None else time.monotonic() + timeout
        if flush:
            if self._queue.qsize() and not self._worker.active and not self._queue.closed:
                self._worker.start()
            self.flush(timeout=timeout)
        self._queue.close()
        stopped = self._worker.join(_remaining(deadline))
        if stopped:
            self._diagnostics.debug("Dispatcher shut down with %d restarts", self._worker.restart_count)
        return stopped

    @property
    def closed(self) -> bool:
        return self._queue.closed

    @property
    def worker_active(self) -> bool:
        """Return ``True`` while the worker thread is alive."""

        return self._worker.active

    @property
    def restart_count(self) -> int:
        return self._worker.restart_count

    # ------------------------------------------------------------------
    # Producers
    # ------------------------------------------------------------------

    def log(self, entry: LogEntry) -> bool:
        """Queue ``entry`` for delivery; never blocks on appender I/O.

        Returns ``False`` only when the dispatcher was shut down and the entry
        was dropped.
        """

        return self._enqueue(entry)

    def send_command(self, command: ControlMessage) -> bool:
        """Queue a control message behind everything already queued."""

        return self._enqueue(command)

    def flush(self, timeout: float | None = None) -> bool:
        """Block until everything queued so far reached every appender.

        Returns ``False`` immediately when no worker is running, when the
        dispatcher was shut down, or when ``timeout`` elapsed. Called from
        the worker thread (an appender flushing its own dispatcher) it
        returns ``False`` without queuing anything.
        """

        if not self._worker.active or self._worker.is_current:
            return False
        self._diagnostics.debug("Flushing appenders with %d log messages on the queue", self._queue.qsize())
        command = FlushCommand()
        if not self._queue.put(command):
            return False
        return command.reply.wait(timeout)

    def _enqueue(self, item: LogEntry | ControlMessage) -> bool:
        if self._autostart and not self._worker.active and not self._queue.closed:
            self._worker.start()
        if self._queue.put(item):
            return True
        self._record_drop(item)
        return False

    def _record_drop(self, item: Any) -> None:
        with self._dropped_lock:
            self._dropped += 1
            dropped = self._dropped
        self._diagnostics.emit(
            "entry_dropped",
            {"reason": "dispatcher_closed", "item": type(item).__name__, "dropped_count": dropped},
        )

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    @property
    def appenders(self) -> AppenderRegistry:
        """The ordered appender registry; safe to mutate at any time."""

        return self._registry

    def add_appender(self, appender: AppenderPort) -> None:
        self._registry.append(appender)

    def remove_appender(self, appender: AppenderPort) -> bool:
        return self._registry.remove(appender)

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    @property
    def queue_size(self) -> int:
        """Entries not yet written to the appenders.

        A growing value means the worker cannot keep up: reduce the amount of
        logging, raise the level, or speed up the appenders.
        """

        return self._queue.qsize()

    @property
    def dropped_count(self) -> int:
        return self._dropped

    @property
    def lag_check_interval(self) -> int:
        """Messages between two checks whether the worker is falling behind."""

        return self._lag_monitor.check_interval

    @lag_check_interval.setter
    def lag_check_interval(self, value: int) -> None:
        self._lag_monitor.check_interval = value

    @property
    def lag_threshold_seconds(self) -> float:
        """Entry age in seconds beyond which a lag warning is emitted."""

        return self._lag_monitor.threshold_seconds

    @lag_threshold_seconds.setter
    def lag_threshold_seconds(self, value: float) -> None:
        self._lag_monitor.threshold_seconds = value

    @property
    def diagnostic_logger(self) -> logging.Logger:
        """Logger receiving the dispatcher's own operational messages.

        Never point it back at this dispatcher: it reports the failures of
        the very appenders it would be routed through.
        """

        return self._diagnostics.logger

    @diagnostic_logger.setter
    def diagnostic_logger(self, logger: logging.Logger | None) -> None:
        self._diagnostics.logger = logger

    @property
    def diagnostic_hook(self) -> DiagnosticHook:
        return self._diagnostics.hook

    @diagnostic_hook.setter
    def diagnostic_hook(self, hook: DiagnosticHook) -> None:
        self._diagnostics.hook = hook


def _remaining(deadline: float | None) -> float | None:
    if deadline is None:
        return None
    return max(0.0, deadline - time.monotonic())


__all__ = ["Dispatcher", "SystemClock"]

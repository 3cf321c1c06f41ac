"""Use case routing one dequeued item to the registered appenders.

Purpose
-------
Implement the worker's message protocol: entries fan out to every appender in
registration order, flush commands flush every appender and answer their
caller, anything else is reported and ignored.

Contents
--------
* :class:`DispatchHandler` - callable invoked by the worker for each item.
* :func:`create_dispatch_handler` - factory used by the composition root.

System Role
-----------
Failures of a single appender are caught here, per appender and per item, and
reported to the diagnostic sink only, never to the failing appender. Anything
that escapes :meth:`DispatchHandler.__call__` is a fault of the dispatch logic
itself and is left to the worker's restart boundary.
"""

from __future__ import annotations

from typing import Any, Callable

from lib_log_dispatch.application.ports import AppenderPort, ClockPort, QueueItem
from lib_log_dispatch.domain import AppenderRegistry, ControlMessage, FlushCommand, LagMonitor, LogEntry

from .diagnostics import Diagnostics


class DispatchHandler:
    """Execute one queue item against the appender registry.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_dispatch.domain import LogLevel
    >>> class Clock:
    ...     def now(self):
    ...         return datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
    >>> class Sink:
    ...     name = 'sink'
    ...     def __init__(self):
    ...         self.messages = []
    ...         self.flushed = 0
    ...     def log(self, entry):
    ...         self.messages.append(entry.message)
    ...     def flush(self):
    ...         self.flushed += 1
    >>> registry = AppenderRegistry()
    >>> sink = Sink()
    >>> registry.append(sink)
    >>> handler = DispatchHandler(registry=registry, lag_monitor=LagMonitor(), clock=Clock(), queue_size=lambda: 0, diagnostics=Diagnostics())
    >>> handler(LogEntry(Clock().now(), LogLevel.INFO, 'svc', 'hello'))
    >>> command = FlushCommand()
    >>> handler(command)
    >>> sink.messages, sink.flushed, command.reply.wait(0)
    (['hello'], 1, True)
    """

    def __init__(
        self,
        *,
        registry: AppenderRegistry,
        lag_monitor: LagMonitor,
        clock: ClockPort,
        queue_size: Callable[[], int],
        diagnostics: Diagnostics,
    ) -> None:
        self._registry = registry
        self._lag_monitor = lag_monitor
        self._clock = clock
        self._queue_size = queue_size
        self._diagnostics = diagnostics

    def __call__(self, item: QueueItem) -> None:
        if isinstance(item, LogEntry):
            self.deliver(item)
        elif isinstance(item, FlushCommand):
            self.flush(item)
        else:
            self.ignore(item)

    def deliver(self, entry: LogEntry) -> None:
        """Hand ``entry`` to every appender, then run the lag check."""

        for appender in self._registry.each():
            try:
                appender.log(entry)
            except Exception as exc:  # noqa: BLE001
                self._report_appender_failure("appender_log_failed", "log to", appender, exc)
        self._check_lag(entry)

    def flush(self, command: FlushCommand) -> None:
        """Flush every appender in order and answer the waiting caller."""

        for appender in self._registry.each():
            name = _appender_name(appender)
            try:
                self._diagnostics.debug("Appender thread: Flushing appender: %s", name)
                appender.flush()
            except Exception as exc:  # noqa: BLE001
                self._report_appender_failure("appender_flush_failed", "flush", appender, exc)
            else:
                self._diagnostics.emit("appender_flushed", {"appender": name})
        command.reply.complete(True)
        self._diagnostics.info("Appender thread: All appenders flushed")

    def ignore(self, item: Any) -> None:
        """Report an unknown control message; the worker carries on."""

        command = item.command if isinstance(item, ControlMessage) else type(item).__name__
        self._diagnostics.warning("Appender thread: Ignoring unknown command: %s", command)
        self._diagnostics.emit("unknown_command", {"command": command})

    def _check_lag(self, entry: LogEntry) -> None:
        lag = self._lag_monitor.record(entry.timestamp, self._clock.now())
        if lag is None:
            return
        backlog = self._queue_size()
        self._diagnostics.warning(
            "Appender thread has fallen behind by %.3f seconds with %d messages queued up. "
            "Consider reducing the log level or changing the appenders",
            lag,
            backlog,
        )
        self._diagnostics.emit("lag_detected", {"lag_seconds": lag, "queue_size": backlog})

    def _report_appender_failure(self, name: str, action: str, appender: AppenderPort, exc: Exception) -> None:
        appender_name = _appender_name(appender)
        self._diagnostics.error("Appender thread: Failed to %s appender: %s", action, appender_name, exc_info=exc)
        self._diagnostics.emit(name, {"appender": appender_name, "exception": repr(exc)})


def _appender_name(appender: AppenderPort) -> str:
    name = getattr(appender, "name", None)
    return name if isinstance(name, str) and name else repr(appender)


def create_dispatch_handler(
    *,
    registry: AppenderRegistry,
    lag_monitor: LagMonitor,
    clock: ClockPort,
    queue_size: Callable[[], int],
    diagnostics: Diagnostics,
) -> DispatchHandler:
    """Freeze the dispatch collaborators into the per-item callable."""

    return DispatchHandler(
        registry=registry,
        lag_monitor=lag_monitor,
        clock=clock,
        queue_size=queue_size,
        diagnostics=diagnostics,
    )


__all__ = ["DispatchHandler", "create_dispatch_handler"]

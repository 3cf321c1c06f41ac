"""Public package surface of the asynchronous log dispatcher.

Producers log through :func:`get` proxies (or :meth:`Dispatcher.log`) without
blocking; one background worker delivers every entry to the registered
appenders in order. Call :func:`flush` to wait for delivery and
:func:`shutdown` during process teardown.
"""

from __future__ import annotations

from .adapters import RichConsoleAppender, RingBufferAppender
from .application.ports import AppenderPort
from .domain import ControlMessage, FlushCommand, LogEntry, LogLevel
from .errors import LogDispatchError, WorkerStartupError
from .runtime import (
    Dispatcher,
    LoggerProxy,
    RuntimeSnapshot,
    add_appender,
    appenders,
    flush,
    get,
    init,
    inspect_runtime,
    is_initialised,
    lag_check_interval,
    lag_threshold_seconds,
    queue_size,
    remove_appender,
    set_diagnostic_logger,
    set_lag_check_interval,
    set_lag_threshold_seconds,
    shutdown,
    shutdown_async,
)

__all__ = [
    "AppenderPort",
    "ControlMessage",
    "Dispatcher",
    "FlushCommand",
    "LogDispatchError",
    "LogEntry",
    "LogLevel",
    "LoggerProxy",
    "RichConsoleAppender",
    "RingBufferAppender",
    "RuntimeSnapshot",
    "WorkerStartupError",
    "add_appender",
    "appenders",
    "flush",
    "get",
    "init",
    "inspect_runtime",
    "is_initialised",
    "lag_check_interval",
    "lag_threshold_seconds",
    "queue_size",
    "remove_appender",
    "set_diagnostic_logger",
    "set_lag_check_interval",
    "set_lag_threshold_seconds",
    "shutdown",
    "shutdown_async",
]

"""Runtime composition helpers wiring domain, application, and adapters.

Purpose
-------
Translate :class:`DispatcherSettings` into the live :class:`LoggingRuntime`
singleton: the dispatcher, its default appenders, the shutdown use case and
the optional interpreter-exit flush.
"""

from __future__ import annotations

import atexit
from typing import Callable

from lib_log_dispatch.adapters import RichConsoleAppender, RingBufferAppender
from lib_log_dispatch.application.ports import ClockPort
from lib_log_dispatch.application.use_cases import create_shutdown

from ._dispatcher import Dispatcher, SystemClock
from ._proxy import LoggerProxy
from ._settings import DispatcherSettings
from ._state import LoggingRuntime


__all__ = ["LoggerProxy", "build_runtime", "release_runtime"]


def build_runtime(settings: DispatcherSettings) -> LoggingRuntime:
    """Assemble the logging runtime from resolved settings."""

    clock: ClockPort = SystemClock()
    dispatcher = Dispatcher(
        lag_check_interval=settings.lag_check_interval,
        lag_threshold_seconds=settings.lag_threshold_seconds,
        autostart=True,
        clock=clock,
        diagnostic_hook=settings.diagnostic_hook,
    )
    console = _create_console(settings)
    ring_buffer = _create_ring_buffer(settings)
    for appender in (console, ring_buffer):
        if appender is not None:
            dispatcher.add_appender(appender)

    if settings.autostart:
        dispatcher.start()

    atexit_hook = _register_atexit(dispatcher) if settings.register_atexit else None

    return LoggingRuntime(
        dispatcher=dispatcher,
        clock=clock,
        settings=settings,
        shutdown_async=create_shutdown(flush=dispatcher.flush, stop=lambda: dispatcher.shutdown(flush=False)),
        console=console,
        ring_buffer=ring_buffer,
        atexit_hook=atexit_hook,
    )


def release_runtime(runtime: LoggingRuntime) -> None:
    """Detach the interpreter-exit hook of a runtime being torn down."""

    if runtime.atexit_hook is not None:
        atexit.unregister(runtime.atexit_hook)
        runtime.atexit_hook = None


def _create_console(settings: DispatcherSettings) -> RichConsoleAppender | None:
    if not settings.console_appender:
        return None
    return RichConsoleAppender(
        force_color=settings.console_force_color,
        no_color=settings.console_no_color,
        template=settings.console_template,
    )


def _create_ring_buffer(settings: DispatcherSettings) -> RingBufferAppender | None:
    if not settings.ring_buffer:
        return None
    return RingBufferAppender(max_entries=settings.ring_buffer_size)


def _register_atexit(dispatcher: Dispatcher) -> Callable[[], bool]:
    """Flush queued entries when the interpreter exits."""

    def _flush_at_exit() -> bool:
        return dispatcher.flush()

    atexit.register(_flush_at_exit)
    return _flush_at_exit

"""Runtime façade over the process-wide dispatcher.

Purpose
-------
Expose a stable entry point (``init``, ``get``, ``flush``, ``shutdown``) that
host applications use instead of wiring a :class:`Dispatcher` themselves. The
original single-dispatcher-per-process usage lives here; tests and embedders
that need independent instances construct :class:`Dispatcher` directly.

Contents
--------
* ``init`` - composition root installing the singleton runtime.
* ``get`` - logger proxies bound to the dispatcher.
* ``add_appender`` / ``remove_appender`` / ``appenders`` - registry access.
* ``queue_size`` / ``lag_check_interval`` / ``lag_threshold_seconds`` /
  ``set_diagnostic_logger`` / ``inspect_runtime`` - host tooling accessors.
* ``flush`` / ``shutdown`` / ``shutdown_async`` - drain and teardown paths.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from lib_log_dispatch.application.ports import AppenderPort
from lib_log_dispatch.application.use_cases import DiagnosticHook
from lib_log_dispatch.domain.lag import DEFAULT_CHECK_INTERVAL, DEFAULT_THRESHOLD_SECONDS

from ._composition import LoggerProxy, build_runtime, release_runtime
from ._dispatcher import Dispatcher, SystemClock
from ._settings import DispatcherSettings, build_runtime_settings
from ._state import LoggingRuntime, clear_runtime, current_runtime, is_initialised, set_runtime


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Immutable view over the active logging runtime."""

    worker_active: bool
    queue_size: int
    appender_names: tuple[str, ...]
    lag_check_interval: int
    lag_threshold_seconds: float
    restart_count: int
    dropped_count: int


__all__ = [
    "Dispatcher",
    "DispatcherSettings",
    "LoggerProxy",
    "LoggingRuntime",
    "RuntimeSnapshot",
    "SystemClock",
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


def init(
    *,
    appenders: tuple[AppenderPort, ...] | list[AppenderPort] = (),
    lag_check_interval: int = DEFAULT_CHECK_INTERVAL,
    lag_threshold_seconds: float = DEFAULT_THRESHOLD_SECONDS,
    autostart: bool = True,
    register_atexit: bool = True,
    console_appender: bool = True,
    console_force_color: bool = False,
    console_no_color: bool = False,
    console_template: str | None = None,
    ring_buffer: bool = False,
    ring_buffer_size: int = 25_000,
    diagnostic_hook: DiagnosticHook = None,
    diagnostic_logger: logging.Logger | None = None,
) -> Dispatcher:
    """Compose the logging runtime according to configuration inputs.

    Why
    ---
    Hosts call ``init`` once during startup. The dispatcher worker starts
    eagerly unless ``autostart`` is ``False`` (it then starts on the first
    logged entry), and an interpreter-exit flush is registered unless
    ``register_atexit`` is ``False``.

    Inputs
    ------
    appenders:
        Extra appenders registered after the built-in console/ring buffer ones.
    lag_check_interval, lag_threshold_seconds:
        Lag monitor tuning; ``LOG_LAG_*`` variables override them.
    console_* / ring_buffer*:
        Built-in appender toggles.
    diagnostic_hook, diagnostic_logger:
        Receivers of the dispatcher's own operational messages.

    Outputs
    -------
    The process-wide :class:`Dispatcher`.

    Side Effects
    ------------
    Raises :class:`RuntimeError` if called while a runtime is already active.
    """

    if is_initialised():
        raise RuntimeError(
            "lib_log_dispatch.init() cannot be called twice without shutdown(); call lib_log_dispatch.shutdown() first",
        )

    settings = build_runtime_settings(
        lag_check_interval=lag_check_interval,
        lag_threshold_seconds=lag_threshold_seconds,
        autostart=autostart,
        register_atexit=register_atexit,
        console_appender=console_appender,
        console_force_color=console_force_color,
        console_no_color=console_no_color,
        console_template=console_template,
        ring_buffer=ring_buffer,
        ring_buffer_size=ring_buffer_size,
        diagnostic_hook=diagnostic_hook,
    )
    runtime = build_runtime(settings)
    if diagnostic_logger is not None:
        runtime.dispatcher.diagnostic_logger = diagnostic_logger
    for appender in appenders:
        runtime.dispatcher.add_appender(appender)
    set_runtime(runtime)
    return runtime.dispatcher


def get(name: str | type) -> LoggerProxy:
    """Return a logger proxy named after ``name`` (a string or a class)."""

    runtime = current_runtime()
    logger_name = name if isinstance(name, str) else f"{name.__module__}.{name.__qualname__}"
    return LoggerProxy(logger_name, runtime.dispatcher.log, runtime.clock)


def add_appender(appender: AppenderPort) -> None:
    """Register ``appender`` after every existing one."""

    current_runtime().dispatcher.add_appender(appender)


def remove_appender(appender: AppenderPort) -> bool:
    """Remove the first registration of ``appender``."""

    return current_runtime().dispatcher.remove_appender(appender)


def appenders() -> tuple[AppenderPort, ...]:
    """Return the registered appenders in delivery order."""

    return current_runtime().dispatcher.appenders.each()


def queue_size() -> int:
    """Entries queued but not yet written to the appenders."""

    return current_runtime().dispatcher.queue_size


def flush(timeout: float | None = None) -> bool:
    """Block until every entry queued so far reached every appender.

    Returns ``False`` when no runtime or no worker is active.
    """

    if not is_initialised():
        return False
    return current_runtime().dispatcher.flush(timeout=timeout)


def lag_check_interval() -> int:
    return current_runtime().dispatcher.lag_check_interval


def set_lag_check_interval(value: int) -> None:
    current_runtime().dispatcher.lag_check_interval = value


def lag_threshold_seconds() -> float:
    return current_runtime().dispatcher.lag_threshold_seconds


def set_lag_threshold_seconds(value: float) -> None:
    current_runtime().dispatcher.lag_threshold_seconds = value


def set_diagnostic_logger(logger: logging.Logger | None) -> None:
    """Replace the dispatcher's diagnostic logger; ``None`` restores the default."""

    current_runtime().dispatcher.diagnostic_logger = logger


def inspect_runtime() -> RuntimeSnapshot:
    """Return a read-only snapshot of the current runtime state."""

    dispatcher = current_runtime().dispatcher
    return RuntimeSnapshot(
        worker_active=dispatcher.worker_active,
        queue_size=dispatcher.queue_size,
        appender_names=tuple(getattr(appender, "name", repr(appender)) for appender in dispatcher.appenders.each()),
        lag_check_interval=dispatcher.lag_check_interval,
        lag_threshold_seconds=dispatcher.lag_threshold_seconds,
        restart_count=dispatcher.restart_count,
        dropped_count=dispatcher.dropped_count,
    )


def shutdown() -> bool:
    """Flush appenders, stop the worker, and clear runtime state synchronously.

    Raises :class:`RuntimeError` when invoked inside a running event loop to
    steer callers to :func:`shutdown_async`.
    """

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None
    if loop is not None and loop.is_running():
        raise RuntimeError(
            "lib_log_dispatch.shutdown() cannot run inside an active event loop; await lib_log_dispatch.shutdown_async() instead",
        )
    return asyncio.run(shutdown_async())


async def shutdown_async() -> bool:
    """Flush appenders, stop the worker, and clear runtime state asynchronously."""

    runtime = current_runtime()
    release_runtime(runtime)
    try:
        return await runtime.shutdown_async()
    finally:
        clear_runtime()

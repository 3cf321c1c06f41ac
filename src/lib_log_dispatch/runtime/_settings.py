"""Runtime settings resolved from ``init`` arguments and ``LOG_*`` variables.

Environment variables take precedence over keyword arguments so operators can
retune a deployed application without code changes:

* ``LOG_LAG_CHECK_INTERVAL`` - messages between lag checks.
* ``LOG_LAG_THRESHOLD_SECONDS`` - entry age that triggers a lag warning.
* ``LOG_AUTOSTART`` - start the worker during ``init``.
* ``LOG_REGISTER_ATEXIT`` - flush automatically at interpreter exit.
* ``LOG_CONSOLE_APPENDER`` / ``LOG_CONSOLE_FORCE_COLOR`` / ``LOG_CONSOLE_NO_COLOR``.
* ``LOG_CONSOLE_TEMPLATE`` - ``str.format`` layout for console lines.
* ``LOG_RING_BUFFER`` / ``LOG_RING_BUFFER_SIZE`` - in-memory appender.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from lib_log_dispatch.application.use_cases import DiagnosticHook
from lib_log_dispatch.domain.lag import DEFAULT_CHECK_INTERVAL, DEFAULT_THRESHOLD_SECONDS

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class DispatcherSettings:
    """Validated configuration consumed by :func:`build_runtime`."""

    lag_check_interval: int = DEFAULT_CHECK_INTERVAL
    lag_threshold_seconds: float = DEFAULT_THRESHOLD_SECONDS
    autostart: bool = True
    register_atexit: bool = True
    console_appender: bool = True
    console_force_color: bool = False
    console_no_color: bool = False
    console_template: str | None = None
    ring_buffer: bool = False
    ring_buffer_size: int = 25_000
    diagnostic_hook: DiagnosticHook = None


def build_runtime_settings(
    *,
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
) -> DispatcherSettings:
    """Merge keyword arguments with environment overrides and validate them."""

    interval = _env_int("LOG_LAG_CHECK_INTERVAL", lag_check_interval)
    if interval < 0:
        raise ValueError("LOG_LAG_CHECK_INTERVAL must not be negative")
    threshold = _env_float("LOG_LAG_THRESHOLD_SECONDS", lag_threshold_seconds)
    if threshold < 0:
        raise ValueError("LOG_LAG_THRESHOLD_SECONDS must not be negative")
    size = _env_int("LOG_RING_BUFFER_SIZE", ring_buffer_size)
    if size <= 0:
        raise ValueError("LOG_RING_BUFFER_SIZE must be positive")

    return DispatcherSettings(
        lag_check_interval=interval,
        lag_threshold_seconds=threshold,
        autostart=_env_bool("LOG_AUTOSTART", autostart),
        register_atexit=_env_bool("LOG_REGISTER_ATEXIT", register_atexit),
        console_appender=_env_bool("LOG_CONSOLE_APPENDER", console_appender),
        console_force_color=_env_bool("LOG_CONSOLE_FORCE_COLOR", console_force_color),
        console_no_color=_env_bool("LOG_CONSOLE_NO_COLOR", console_no_color),
        console_template=os.getenv("LOG_CONSOLE_TEMPLATE") or console_template,
        ring_buffer=_env_bool("LOG_RING_BUFFER", ring_buffer),
        ring_buffer_size=size,
        diagnostic_hook=diagnostic_hook,
    )


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> import os
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL', None)
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_EXAMPLE_BOOL'] = 'off'
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    False
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL')
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {value!r}")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return float(default)
    try:
        return float(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


__all__ = ["DispatcherSettings", "build_runtime_settings"]

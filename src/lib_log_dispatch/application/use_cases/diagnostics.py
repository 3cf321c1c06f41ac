"""Internal diagnostic sink used for the dispatcher's own operational messages.

Purpose
-------
Keep reports about failing appenders, lag and worker restarts out of the
dispatch queue: they go to a plain :mod:`logging` logger (replaceable by the
host) and to an optional structured hook.

Contents
--------
* :data:`DiagnosticHook` - callable signature ``(name, payload) -> None``.
* :class:`Diagnostics` - pairs the logger with the guarded hook. Logging
  calls made through it never raise; a broken diagnostic logger degrades to
  :data:`logging.lastResort`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

DiagnosticHook = Optional[Callable[[str, dict[str, Any]], None]]

DEFAULT_LOGGER_NAME = "lib_log_dispatch.dispatcher"


class Diagnostics:
    """Diagnostic logger plus optional hook; hook failures never escape.

    Examples
    --------
    >>> seen = []
    >>> diagnostics = Diagnostics(hook=lambda name, payload: seen.append((name, payload)))
    >>> diagnostics.emit('lag_detected', {'lag_seconds': 1.5})
    >>> seen
    [('lag_detected', {'lag_seconds': 1.5})]
    >>> diagnostics.logger.name
    'lib_log_dispatch.dispatcher'
    """

    def __init__(self, *, logger: logging.Logger | None = None, hook: DiagnosticHook = None) -> None:
        self.logger = logger if logger is not None else logging.getLogger(DEFAULT_LOGGER_NAME)
        self.hook = hook

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @logger.setter
    def logger(self, value: logging.Logger | None) -> None:
        self._logger = value if value is not None else logging.getLogger(DEFAULT_LOGGER_NAME)

    def emit(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the hook while guarding against callback failures."""

        hook = self.hook
        if hook is None:
            return
        try:
            hook(name, payload)
        except Exception as exc:  # noqa: BLE001
            self.error("Diagnostic hook raised while reporting %s", name, exc_info=exc)

    def debug(self, msg: str, *args: object, exc_info: Any = None) -> None:
        self._log(logging.DEBUG, msg, args, exc_info)

    def info(self, msg: str, *args: object, exc_info: Any = None) -> None:
        self._log(logging.INFO, msg, args, exc_info)

    def warning(self, msg: str, *args: object, exc_info: Any = None) -> None:
        self._log(logging.WARNING, msg, args, exc_info)

    def error(self, msg: str, *args: object, exc_info: Any = None) -> None:
        self._log(logging.ERROR, msg, args, exc_info)

    def critical(self, msg: str, *args: object, exc_info: Any = None) -> None:
        self._log(logging.CRITICAL, msg, args, exc_info)

    def _log(self, level: int, msg: str, args: tuple[object, ...], exc_info: Any) -> None:
        """Forward to the diagnostic logger; handler failures never propagate."""

        try:
            self._logger.log(level, msg, *args, exc_info=exc_info)
        except Exception as exc:  # noqa: BLE001
            _last_resort(level, msg, args, exc)


def _last_resort(level: int, msg: str, args: tuple[object, ...], failure: Exception) -> None:
    handler = logging.lastResort
    if handler is None:
        return
    record = logging.LogRecord(
        DEFAULT_LOGGER_NAME,
        level,
        __file__,
        0,
        f"{msg} (diagnostic logger failed: %r)",
        (*args, failure),
        None,
    )
    handler.handle(record)


__all__ = ["DEFAULT_LOGGER_NAME", "DiagnosticHook", "Diagnostics"]

"""Logger proxy turning level-specific calls into queued entries."""

from __future__ import annotations

import sys
import traceback
from typing import Any, Callable, Mapping, Optional

from lib_log_dispatch.application.ports import ClockPort
from lib_log_dispatch.domain import LogEntry, LogLevel

ExcInfo = Optional[BaseException | bool | str]


class LoggerProxy:
    """Lightweight facade for structured logging calls.

    The proxy stamps each entry with the clock, its logger name and the level,
    then hands it to the dispatcher. Calls return ``True`` when the entry was
    queued and ``False`` when the dispatcher had already shut down.
    """

    def __init__(self, name: str, submit: Callable[[LogEntry], bool], clock: ClockPort) -> None:
        """Bind a logger name to the dispatcher's ``log`` callable.

        Parameters
        ----------
        name:
            Logical source identifier (e.g. ``"app.http"`` or a class name).
        submit:
            Callable enqueuing the entry, usually :meth:`Dispatcher.log`.
        clock:
            Clock stamping entry timestamps.
        """
        self._name = name
        self._submit = submit
        self._clock = clock

    @property
    def name(self) -> str:
        return self._name

    def debug(self, message: str, *, payload: Mapping[str, Any] | None = None, exc_info: ExcInfo = None) -> bool:
        return self.log(LogLevel.DEBUG, message, payload=payload, exc_info=exc_info)

    def info(self, message: str, *, payload: Mapping[str, Any] | None = None, exc_info: ExcInfo = None) -> bool:
        return self.log(LogLevel.INFO, message, payload=payload, exc_info=exc_info)

    def warning(self, message: str, *, payload: Mapping[str, Any] | None = None, exc_info: ExcInfo = None) -> bool:
        return self.log(LogLevel.WARNING, message, payload=payload, exc_info=exc_info)

    def error(self, message: str, *, payload: Mapping[str, Any] | None = None, exc_info: ExcInfo = None) -> bool:
        return self.log(LogLevel.ERROR, message, payload=payload, exc_info=exc_info)

    def critical(self, message: str, *, payload: Mapping[str, Any] | None = None, exc_info: ExcInfo = None) -> bool:
        return self.log(LogLevel.CRITICAL, message, payload=payload, exc_info=exc_info)

    def exception(self, message: str, *, payload: Mapping[str, Any] | None = None) -> bool:
        """Log at ``ERROR`` with the exception currently being handled."""
        return self.log(LogLevel.ERROR, message, payload=payload, exc_info=True)

    def log(
        self,
        level: LogLevel | int | str,
        message: str,
        *,
        payload: Mapping[str, Any] | None = None,
        exc_info: ExcInfo = None,
    ) -> bool:
        """Build the entry and queue it for delivery.

        ``level`` may be a :class:`LogLevel`, a :mod:`logging` constant such
        as ``logging.WARNING`` or a level name.
        """
        entry = LogEntry(
            timestamp=self._clock.now(),
            level=coerce_level(level),
            logger_name=self._name,
            message=message,
            payload=payload or {},
            exc_info=_render_exc_info(exc_info),
        )
        return self._submit(entry)


def coerce_level(level: LogLevel | int | str) -> LogLevel:
    """Resolve enum members, stdlib level numbers and level names.

    Examples
    --------
    >>> coerce_level(30) is LogLevel.WARNING
    True
    >>> coerce_level("error") is LogLevel.ERROR
    True
    """
    if isinstance(level, LogLevel):
        return level
    if isinstance(level, int):
        return LogLevel.from_python_level(level)
    return LogLevel.from_name(level)


def _render_exc_info(exc_info: ExcInfo) -> str | None:
    """Normalise ``exc_info`` into traceback text.

    Examples
    --------
    >>> _render_exc_info(None) is None
    True
    >>> _render_exc_info('boom')
    'boom'
    >>> 'ValueError: bad' in _render_exc_info(ValueError('bad'))
    True
    """
    if exc_info is None or exc_info is False:
        return None
    if isinstance(exc_info, str):
        return exc_info
    if isinstance(exc_info, BaseException):
        return "".join(traceback.format_exception(type(exc_info), exc_info, exc_info.__traceback__)).rstrip()
    current = sys.exc_info()
    if current[0] is None:
        return None
    return "".join(traceback.format_exception(*current)).rstrip()


__all__ = ["LoggerProxy", "coerce_level"]

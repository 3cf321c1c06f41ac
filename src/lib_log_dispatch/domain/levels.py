"""Severities stamped on dispatched entries.

The numeric values line up with :mod:`logging` so hosts can pass either a
:class:`LogLevel` or the stdlib integer constant to a logger proxy. Appenders
render the lowercase ``severity`` name or the console ``icon``.
"""

from __future__ import annotations

from enum import Enum


class LogLevel(Enum):
    """Entry severity; values equal the :mod:`logging` level numbers.

    Examples
    --------
    >>> LogLevel.from_name('warn') is LogLevel.WARNING
    True
    >>> LogLevel.from_python_level(40).severity
    'error'
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @property
    def severity(self) -> str:
        return self.name.lower()

    @property
    def icon(self) -> str:
        """Glyph shown in front of console lines."""

        return _ICONS[self]

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Parse a case-insensitive level name; ``WARN`` is accepted."""

        key = name.strip().upper()
        try:
            return cls[_ALIASES.get(key, key)]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Map ``logging.INFO`` and friends onto :class:`LogLevel`."""

        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc


_ALIASES = {"WARN": "WARNING"}

_ICONS = {
    LogLevel.DEBUG: "🐞",
    LogLevel.INFO: "ℹ",
    LogLevel.WARNING: "⚠",
    LogLevel.ERROR: "✖",
    LogLevel.CRITICAL: "☠",
}


__all__ = ["LogLevel"]

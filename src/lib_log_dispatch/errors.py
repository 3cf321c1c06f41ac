"""Exceptions raised by the dispatch core."""

from __future__ import annotations


class LogDispatchError(RuntimeError):
    """Base class for dispatcher failures surfaced to callers."""


class WorkerStartupError(LogDispatchError):
    """The appender thread could not be created; no delivery is possible."""


__all__ = ["LogDispatchError", "WorkerStartupError"]

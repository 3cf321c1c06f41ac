"""Appender port describing a delivery sink for log entries.

Purpose
-------
Define the narrow capability the worker relies on, so console, file, network
or database sinks plug in without the core inspecting their configuration.

Contents
--------
* :class:`AppenderPort` - runtime-checkable protocol with ``name``, ``log``
  and ``flush``.

System Role
-----------
Failures are signalled by raising; the worker isolates them per appender and
per message, so an implementation never needs to guard its own errors.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_dispatch.domain.entries import LogEntry


@runtime_checkable
class AppenderPort(Protocol):
    """Deliver entries to one output medium."""

    name: str

    def log(self, entry: LogEntry) -> None:
        """Write ``entry`` to the medium."""

    def flush(self) -> None:
        """Push any buffered output to the medium."""


__all__ = ["AppenderPort"]

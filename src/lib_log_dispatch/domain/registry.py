"""Ordered appender registry shared between setup code and the worker.

Purpose
-------
Hold the appenders in registration order while host code adds or removes them
concurrently with an in-flight delivery pass.

Contents
--------
* :class:`AppenderRegistry` - copy-on-write list of appender handles.

System Role
-----------
Every mutation swaps in a fresh tuple under a lock; the worker reads whichever
tuple is current when a pass starts, so a pass never skips or repeats an
appender even while the registry changes underneath it.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from lib_log_dispatch.application.ports.appender import AppenderPort


class AppenderRegistry:
    """Thread-safe ordered collection of appenders.

    Duplicates are kept: registering the same appender twice delivers each
    entry to it twice, in registration order.

    Examples
    --------
    >>> class Sink:
    ...     name = 'sink'
    ...     def log(self, entry): pass
    ...     def flush(self): pass
    >>> registry = AppenderRegistry()
    >>> sink = Sink()
    >>> registry.append(sink)
    >>> registry.append(sink)
    >>> len(registry)
    2
    >>> registry.remove(sink)
    True
    >>> len(registry.each())
    1
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: tuple[AppenderPort, ...] = ()

    def append(self, appender: AppenderPort) -> None:
        """Register ``appender`` after every existing one."""

        with self._lock:
            self._items = self._items + (appender,)

    def remove(self, appender: AppenderPort) -> bool:
        """Drop the first registration of ``appender``; ``False`` when absent."""

        with self._lock:
            for index, candidate in enumerate(self._items):
                if candidate is appender:
                    self._items = self._items[:index] + self._items[index + 1 :]
                    return True
            return False

    def clear(self) -> None:
        """Remove every registered appender."""

        with self._lock:
            self._items = ()

    def each(self) -> tuple[AppenderPort, ...]:
        """Return the snapshot used for one delivery pass."""

        return self._items

    def __iter__(self) -> Iterator[AppenderPort]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["AppenderRegistry"]

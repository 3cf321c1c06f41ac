"""Control messages travelling through the dispatch queue next to entries.

Purpose
-------
Model the commands the worker executes in queue order, plus the single-use
reply channel a flush caller blocks on.

Contents
--------
* :class:`CompletionSignal` - one-shot completion carrying a boolean result.
* :class:`ControlMessage` - base command; unknown subclasses are ignored.
* :class:`FlushCommand` - drain-and-flush request answered via its signal.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field


class CompletionSignal:
    """Single-use completion fired exactly once by the worker.

    Examples
    --------
    >>> signal = CompletionSignal()
    >>> signal.done
    False
    >>> signal.complete(True)
    True
    >>> signal.complete(False)
    False
    >>> signal.wait()
    True
    """

    __slots__ = ("_event", "_lock", "_value")

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._value = False

    @property
    def done(self) -> bool:
        return self._event.is_set()

    def complete(self, value: bool) -> bool:
        """Fire the signal with ``value``; returns ``False`` if already fired."""

        with self._lock:
            if self._event.is_set():
                return False
            self._value = value
            self._event.set()
            return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until fired and return the value, or ``False`` on timeout."""

        if not self._event.wait(timeout):
            return False
        return self._value


@dataclass(frozen=True)
class ControlMessage:
    """Command executed by the worker in FIFO order with entries."""

    command: str


@dataclass(frozen=True)
class FlushCommand(ControlMessage):
    """Flush every appender, then answer on :attr:`reply`."""

    command: str = "flush"
    reply: CompletionSignal = field(default_factory=CompletionSignal)


__all__ = ["CompletionSignal", "ControlMessage", "FlushCommand"]

"""Domain entities and value objects used by the dispatch core."""

from __future__ import annotations

from .commands import CompletionSignal, ControlMessage, FlushCommand
from .entries import LogEntry
from .lag import LagMonitor
from .levels import LogLevel
from .registry import AppenderRegistry
from .ring_buffer import RingBuffer

__all__ = [
    "AppenderRegistry",
    "CompletionSignal",
    "ControlMessage",
    "FlushCommand",
    "LagMonitor",
    "LogEntry",
    "LogLevel",
    "RingBuffer",
]

"""Ports consumed by the application layer."""

from __future__ import annotations

from .appender import AppenderPort
from .queue import QueueItem, QueuePort
from .time import ClockPort

__all__ = ["AppenderPort", "ClockPort", "QueueItem", "QueuePort"]

"""Adapters implementing the dispatch ports."""

from __future__ import annotations

from .console.rich_console import RichConsoleAppender
from .memory import RingBufferAppender
from .queue import DispatchQueue
from .worker import AppenderThread

__all__ = ["AppenderThread", "DispatchQueue", "RichConsoleAppender", "RingBufferAppender"]

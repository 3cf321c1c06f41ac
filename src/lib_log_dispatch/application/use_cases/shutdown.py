"""Shutdown orchestration for the dispatch core.

Purpose
-------
Provide a unified shutdown routine that drains the queue through the flush
protocol and then stops the worker.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable


def create_shutdown(
    *,
    flush: Callable[[], bool],
    stop: Callable[[], None],
) -> Callable[[], Awaitable[bool]]:
    """Return an async callable performing the shutdown sequence.

    The blocking flush and join run in a worker thread so an event loop keeps
    serving other tasks while the backlog drains.
    """

    async def shutdown() -> bool:
        """Flush queued entries and appenders, then stop the worker."""
        flushed = await asyncio.to_thread(flush)
        await asyncio.to_thread(stop)
        return flushed

    return shutdown


__all__ = ["create_shutdown"]

"""Use cases orchestrating delivery, diagnostics and shutdown."""

from __future__ import annotations

from .diagnostics import DEFAULT_LOGGER_NAME, DiagnosticHook, Diagnostics
from .dispatch import DispatchHandler, create_dispatch_handler
from .shutdown import create_shutdown

__all__ = [
    "DEFAULT_LOGGER_NAME",
    "DiagnosticHook",
    "Diagnostics",
    "DispatchHandler",
    "create_dispatch_handler",
    "create_shutdown",
]

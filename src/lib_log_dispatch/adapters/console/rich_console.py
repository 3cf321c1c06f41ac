"""Rich-powered console appender implementing :class:`AppenderPort`.

Purpose
-------
Render delivered entries on an interactive terminal with per-level styles.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :data:`DEFAULT_TEMPLATE` - line layout used unless a template is given.
* :class:`RichConsoleAppender` - appender registered by :func:`lib_log_dispatch.init`.

System Role
-----------
Primary human-facing sink; runs on the dispatcher's worker thread, so it
never blocks producers.
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console

from lib_log_dispatch.adapters._formatting import build_format_payload
from lib_log_dispatch.application.ports.appender import AppenderPort
from lib_log_dispatch.domain.entries import LogEntry
from lib_log_dispatch.domain.levels import LogLevel


_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
    LogLevel.CRITICAL: "bold red",
}

DEFAULT_TEMPLATE = "{timestamp} {level_icon} {LEVEL:>8} {logger_name} - {message}{payload_fields}"


class RichConsoleAppender(AppenderPort):
    """Render log entries using Rich formatting with style overrides."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: Mapping[LogLevel | str, str] | None = None,
        template: str | None = None,
        name: str = "console",
    ) -> None:
        """Configure the appender with colour, style and layout overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(stderr=True, force_terminal=force_color or None, no_color=no_color)
        self.name = name
        self._no_color = no_color
        self._template = template or DEFAULT_TEMPLATE
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = LogLevel.from_name(key) if isinstance(key, str) else key
            merged[level] = value
        self._style_map = merged

    def log(self, entry: LogEntry) -> None:
        """Print ``entry`` using Rich.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from io import StringIO
        >>> entry = LogEntry(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, 'svc', 'msg')
        >>> console = Console(file=StringIO(), record=True)
        >>> appender = RichConsoleAppender(console=console)
        >>> appender.log(entry)
        >>> 'msg' in console.export_text()
        True
        """
        style = "" if self._no_color else self._style_map.get(entry.level, "")
        self._console.print(self.format_line(entry), style=style, highlight=False, markup=False, soft_wrap=True)
        if entry.exc_info:
            self._console.print(entry.exc_info, style=style, highlight=False, markup=False, soft_wrap=True)

    def flush(self) -> None:
        """Flush the underlying console stream."""
        self._console.file.flush()

    def format_line(self, entry: LogEntry) -> str:
        """Return the console line for ``entry`` rendered through the template."""
        return self._template.format(**build_format_payload(entry))


__all__ = ["DEFAULT_TEMPLATE", "RichConsoleAppender"]

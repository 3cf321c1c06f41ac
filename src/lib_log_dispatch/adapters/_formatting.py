"""Utilities that normalise log entries into template-friendly dictionaries.

Why
---
Console output accepts ``str.format`` placeholders; producing the mapping in
one place keeps presets and custom templates on the same data contract.

Contents
--------
* :func:`build_format_payload` - generate placeholder values for an entry.
"""

from __future__ import annotations

from typing import Any

from lib_log_dispatch.domain.entries import LogEntry


def build_format_payload(entry: LogEntry) -> dict[str, Any]:
    """Return the mapping of placeholders exposed to format templates.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_dispatch.domain.levels import LogLevel
    >>> entry = LogEntry(datetime(2025, 9, 30, 12, 5, tzinfo=timezone.utc), LogLevel.WARNING, 'svc', 'disk', {'free': 3})
    >>> payload = build_format_payload(entry)
    >>> payload['LEVEL'], payload['hh'], payload['payload_fields']
    ('WARNING', '12', ' free=3')
    """

    payload_dict = dict(entry.payload)
    payload_fields = ""
    visible = {key: value for key, value in payload_dict.items() if value not in (None, {})}
    if visible:
        payload_fields = " " + " ".join(f"{key}={value}" for key, value in sorted(visible.items()))

    level_text = entry.level.severity.upper()
    ts = entry.timestamp

    return {
        "timestamp": ts.isoformat(),
        "YYYY": f"{ts.year:04d}",
        "MM": f"{ts.month:02d}",
        "DD": f"{ts.day:02d}",
        "hh": f"{ts.hour:02d}",
        "mm": f"{ts.minute:02d}",
        "ss": f"{ts.second:02d}",
        "level": level_text,
        "LEVEL": level_text,
        "level_name": entry.level.name,
        "level_icon": entry.level.icon,
        "logger_name": entry.logger_name,
        "message": entry.message,
        "payload": payload_dict,
        "payload_fields": payload_fields,
        "exc_info": entry.exc_info or "",
    }


__all__ = ["build_format_payload"]

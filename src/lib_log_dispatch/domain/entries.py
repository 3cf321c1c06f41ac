"""Domain value describing one structured log entry.

Purpose
-------
Provide the immutable record that producers hand to the dispatcher and that
every appender reads during a delivery pass.

Contents
--------
* :class:`LogEntry` dataclass with serialisation helpers.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Sits in the domain layer; the dispatch queue, the worker and all appenders
share the same instance read-only, so nothing downstream may mutate it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogEntry:
    """Immutable log entry transported through the dispatch queue.

    Attributes
    ----------
    timestamp:
        Creation time in timezone-aware UTC; the lag monitor compares it with
        the delivery time.
    level:
        :class:`LogLevel` severity associated with the entry.
    logger_name:
        Logical source (class, module or component name) emitting the entry.
    message:
        Rendered message passed by the caller.
    payload:
        Read-only copy of caller-supplied key/value pairs.
    exc_info:
        Optional exception text captured when logging failures.

    Examples
    --------
    >>> entry = LogEntry(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, 'svc', 'hello', {'user': 'joe'})
    >>> entry.payload['user']
    'joe'
    >>> entry.to_dict()['level']
    'info'
    """

    timestamp: datetime
    level: LogLevel
    logger_name: str
    message: str
    payload: Mapping[str, Any] = field(default_factory=dict)
    exc_info: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        if not isinstance(self.message, str):
            raise TypeError("message must be a string")
        if not self.logger_name:
            raise ValueError("logger_name must not be empty")
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry to a dictionary with ISO8601 timestamps."""

        data = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.severity,
            "logger_name": self.logger_name,
            "message": self.message,
            "payload": dict(self.payload),
        }
        if self.exc_info is not None:
            data["exc_info"] = self.exc_info
        return data

    def to_json(self) -> str:
        """Serialize the entry to JSON with sorted keys for deterministic output."""

        return json.dumps(self.to_dict(), sort_keys=True, default=str)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LogEntry":
        """Reconstruct an entry from :meth:`to_dict` output."""

        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            level=LogLevel.from_name(data["level"]),
            logger_name=data["logger_name"],
            message=data["message"],
            payload=data.get("payload", {}),
            exc_info=data.get("exc_info"),
        )


__all__ = ["LogEntry"]

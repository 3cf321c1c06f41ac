"""Lag bookkeeping performed by the worker after each delivered entry.

The worker counts deliveries; once the count exceeds ``check_interval`` it
compares the age of the entry it just delivered against
``threshold_seconds``. The counter resets at every check, whether or not the
threshold was breached.
"""

from __future__ import annotations

from datetime import datetime

DEFAULT_CHECK_INTERVAL = 5000
DEFAULT_THRESHOLD_SECONDS = 30.0


class LagMonitor:
    """Counter-based detector for a worker falling behind its producers.

    Examples
    --------
    >>> from datetime import timedelta, timezone
    >>> monitor = LagMonitor(check_interval=1, threshold_seconds=5)
    >>> now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    >>> monitor.record(now - timedelta(seconds=60), now) is None
    True
    >>> monitor.record(now - timedelta(seconds=60), now)
    60.0
    >>> monitor.delivered_since_check
    0
    """

    def __init__(
        self,
        *,
        check_interval: int = DEFAULT_CHECK_INTERVAL,
        threshold_seconds: float = DEFAULT_THRESHOLD_SECONDS,
    ) -> None:
        self.check_interval = check_interval
        self.threshold_seconds = threshold_seconds
        self._delivered_since_check = 0

    @property
    def check_interval(self) -> int:
        """Deliveries between two lag checks."""

        return self._check_interval

    @check_interval.setter
    def check_interval(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("check_interval must be an integer")
        if value < 0:
            raise ValueError("check_interval must not be negative")
        self._check_interval = value

    @property
    def threshold_seconds(self) -> float:
        """Age in seconds beyond which a delivered entry counts as lagging."""

        return self._threshold_seconds

    @threshold_seconds.setter
    def threshold_seconds(self, value: float) -> None:
        if value < 0:
            raise ValueError("threshold_seconds must not be negative")
        self._threshold_seconds = float(value)

    @property
    def delivered_since_check(self) -> int:
        return self._delivered_since_check

    def record(self, timestamp: datetime, now: datetime) -> float | None:
        """Count one delivery; return the lag in seconds when a warning is due."""

        self._delivered_since_check += 1
        if self._delivered_since_check <= self._check_interval:
            return None
        self._delivered_since_check = 0
        lag = (now - timestamp).total_seconds()
        if lag > self._threshold_seconds:
            return lag
        return None


__all__ = ["DEFAULT_CHECK_INTERVAL", "DEFAULT_THRESHOLD_SECONDS", "LagMonitor"]

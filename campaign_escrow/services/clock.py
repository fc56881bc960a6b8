"""
Clock Sources

Deadlines are absolute timestamps compared against the current time when an
operation runs. There are no scheduled callbacks, so the clock is the only
thing that moves a campaign from open to expired.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional, Union


class Clock(ABC):
    """Source of the current time. Must never go backwards."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        pass


class SystemClock(Clock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class ManualClock(Clock):
    """
    A clock that only moves when told to.

    Used in tests and simulations to step across deadlines deterministically.
    """

    def __init__(self, start: Optional[datetime] = None):
        start = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        if start.tzinfo is None:
            raise ValueError("ManualClock requires a timezone-aware start time")
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, delta: Union[timedelta, int, float]) -> datetime:
        """Move forward by a timedelta or a number of seconds."""
        if not isinstance(delta, timedelta):
            delta = timedelta(seconds=delta)
        if delta < timedelta(0):
            raise ValueError("Clock cannot move backwards")
        self._now = self._now + delta
        return self._now

    def set(self, moment: datetime) -> None:
        if moment < self._now:
            raise ValueError("Clock cannot move backwards")
        self._now = moment

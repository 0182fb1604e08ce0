"""
Clock abstraction so time-dependent code (monthly seeding, response cache,
daily quota) can be driven deterministically in tests.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol


class Clock(Protocol):
    """Anything that can tell the current UTC time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FrozenClock:
    """
    Manually advanced clock.

    Usage:
        clock = FrozenClock(datetime(2025, 3, 15, tzinfo=timezone.utc))
        clock.advance(seconds=301)
    """

    def __init__(self, start: Optional[datetime] = None):
        self._now = start or datetime(2025, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, **delta) -> datetime:
        """Move forward by timedelta keyword arguments (seconds=, hours=, days=)."""
        self._now = self._now + timedelta(**delta)
        return self._now

    def set(self, moment: datetime) -> None:
        self._now = moment


system_clock = SystemClock()

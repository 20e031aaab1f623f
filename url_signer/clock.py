"""
Clocks used by the URL signer to stamp and enforce expiration.
"""

import datetime
from typing import Optional, Protocol, Union


class Clock(Protocol):
    """Anything that can tell the current time."""

    def now(self) -> datetime.datetime:
        ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime.datetime:
        return datetime.datetime.now(datetime.timezone.utc)


class MockClock:
    """
    Frozen clock that only moves when told to.

    Useful in tests and anywhere signing must be deterministic.
    """

    def __init__(self, now: Optional[Union[datetime.datetime, int, float]] = None):
        if now is None:
            now = datetime.datetime.now(datetime.timezone.utc)
        elif isinstance(now, (int, float)):
            now = datetime.datetime.fromtimestamp(now, datetime.timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=datetime.timezone.utc)
        self._now = now

    def now(self) -> datetime.datetime:
        return self._now

    def sleep(self, seconds: float):
        """Advance the clock by the given number of seconds."""
        self._now += datetime.timedelta(seconds=seconds)

    def modify(self, delta: datetime.timedelta):
        """Shift the clock by an arbitrary (possibly negative) delta."""
        self._now += delta


def unix_time(clock: Clock) -> int:
    """Current time of the clock as integer Unix seconds."""
    return int(clock.now().timestamp())

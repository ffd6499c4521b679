# src/focus_tracker/core/clock.py

"""
Time source and day-boundary helpers.

All day arithmetic uses the UTC calendar date: a task belongs to the day its
created_at falls on in UTC, "today" is the current UTC date, and the rollover
boundary is UTC midnight.
"""

from __future__ import annotations

import math
import time
from datetime import UTC, datetime, timedelta
from typing import Protocol

DATE_FORMAT = "%Y-%m-%d"


class Clock(Protocol):
    def now(self) -> float: ...


class SystemClock:
    """Wall clock (epoch seconds)."""

    def now(self) -> float:
        return time.time()


def date_key(ts: float) -> str:
    return datetime.fromtimestamp(float(ts), UTC).strftime(DATE_FORMAT)


def today(clock: Clock) -> str:
    return date_key(clock.now())


def seconds_until_midnight(ts: float) -> float:
    """Seconds from ts until the next UTC day boundary (always > 0)."""
    current = datetime.fromtimestamp(float(ts), UTC)
    midnight = (current + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)
    return (midnight - current).total_seconds()


def elapsed_seconds(start: float, now: float) -> int:
    """
    Whole seconds between start and now.

    Sub-second remainders are truncated per session. A clock that stepped
    backwards yields 0, never negative time.
    """
    return max(0, int(math.floor(float(now) - float(start))))


def day_bounds(date: str) -> tuple[float, float]:
    """[start, end) epoch seconds of a UTC calendar date."""
    start = datetime.strptime(date, DATE_FORMAT).replace(tzinfo=UTC)
    end = start + timedelta(days=1)
    return start.timestamp(), end.timestamp()

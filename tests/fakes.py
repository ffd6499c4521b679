# tests/fakes.py

from __future__ import annotations

from datetime import UTC, datetime


def ts(iso: str) -> float:
    """'2024-01-01T10:00:00' (UTC) -> epoch seconds."""
    return datetime.fromisoformat(iso).replace(tzinfo=UTC).timestamp()


class FakeClock:
    """
    Settable clock for deterministic tests.

    Time only moves when the test moves it.
    """

    def __init__(self, start: str = "2024-01-01T10:00:00") -> None:
        self._now = ts(start)

    def now(self) -> float:
        return self._now

    def set(self, iso: str) -> None:
        self._now = ts(iso)

    def advance(self, seconds: float) -> None:
        self._now += float(seconds)

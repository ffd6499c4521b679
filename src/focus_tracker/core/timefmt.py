# src/focus_tracker/core/timefmt.py

from __future__ import annotations

from datetime import datetime

from .clock import DATE_FORMAT


def format_duration(seconds: int) -> str:
    """Format seconds as HH:MM:SS (hours are not wrapped at 24)."""
    seconds = max(0, int(seconds))
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_date(date: str) -> str:
    """'2026-02-03' -> 'Feb 3, 2026'."""
    d = datetime.strptime(date, DATE_FORMAT)
    return f"{d.strftime('%b')} {d.day}, {d.year}"

# tests/test_clock_and_bootstrap.py

from __future__ import annotations

from focus_tracker.cli.bootstrap import create_initial_state
from focus_tracker.core.clock import date_key, day_bounds, elapsed_seconds, seconds_until_midnight
from focus_tracker.core.timefmt import format_date, format_duration
from focus_tracker.tasks.task_api import sort_for_display, toggle_pin
from focus_tracker.tasks.task_store import TaskStore

from .fakes import FakeClock, ts


def test_day_helpers_use_utc_dates() -> None:
    assert date_key(ts("2024-01-01T23:59:59")) == "2024-01-01"
    assert date_key(ts("2024-01-02T00:00:00")) == "2024-01-02"
    assert day_bounds("2024-01-01") == (ts("2024-01-01T00:00:00"), ts("2024-01-02T00:00:00"))
    assert seconds_until_midnight(ts("2024-01-01T23:00:00")) == 3600.0
    assert seconds_until_midnight(ts("2024-01-01T00:00:00")) == 86400.0


def test_elapsed_seconds_truncates() -> None:
    assert elapsed_seconds(100.0, 430.999) == 330
    assert elapsed_seconds(100.0, 99.0) == 0


def test_formatting() -> None:
    assert format_duration(0) == "00:00:00"
    assert format_duration(330) == "00:05:30"
    assert format_duration(90061) == "25:01:01"
    assert format_date("2026-02-03") == "Feb 3, 2026"


def test_sort_for_display_pinned_then_newest(task_store: TaskStore, clock: FakeClock) -> None:
    old = task_store.create(title="old")
    clock.advance(60)
    pinned_old = task_store.create(title="pinned", pinned=True)
    clock.advance(60)
    new = task_store.create(title="new")

    ordered = sort_for_display(task_store.get_all())
    assert [t.id for t in ordered] == [pinned_old.id, new.id, old.id]


def test_toggle_pin(state) -> None:
    task = state.task_store.create(title="A")
    assert toggle_pin(state, task.id).pinned is True
    assert toggle_pin(state, task.id).pinned is False
    assert toggle_pin(state, 404) is None


def test_bootstrap_picks_up_leftover_days(settings, clock: FakeClock) -> None:
    store = TaskStore(settings.tasks_db_path, clock=clock)
    store.create(title="from an old day")

    clock.set("2024-01-05T09:00:00")
    state = create_initial_state(settings=settings, clock=clock)
    assert state.last_checked_date == "2024-01-01"

    assert state.rollover.check_and_roll(state.last_checked_date) == "2024-01-05"
    assert state.task_store.get_all() == []
    assert state.stats_store.get_by_date("2024-01-01") is not None


def test_bootstrap_fresh_state(state) -> None:
    assert state.last_checked_date == "2024-01-01"
    assert state.rollover.check_and_roll(state.last_checked_date) is None

# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from focus_tracker.cli.bootstrap import create_initial_state
from focus_tracker.core.state import AppState
from focus_tracker.stats.aggregator import StatsAggregator
from focus_tracker.stats.rollover import RolloverCoordinator
from focus_tracker.stats.stats_store import StatsStore
from focus_tracker.tasks.task_store import TaskStore
from focus_tracker.tasks.timer_engine import TimerEngine

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="focus-test",
        log_level="DEBUG",
        log_file=None,
        console_enabled=False,
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        stats_db_path=tmp_path / "stats.sqlite3",
        rollover_interval_seconds=60.0,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock("2024-01-01T10:00:00")


@pytest.fixture()
def task_store(settings: SimpleNamespace, clock: FakeClock) -> TaskStore:
    return TaskStore(settings.tasks_db_path, clock=clock)


@pytest.fixture()
def stats_store(settings: SimpleNamespace) -> StatsStore:
    return StatsStore(settings.stats_db_path)


@pytest.fixture()
def timer(task_store: TaskStore, clock: FakeClock) -> TimerEngine:
    return TimerEngine(task_store, clock)


@pytest.fixture()
def aggregator(task_store: TaskStore, clock: FakeClock) -> StatsAggregator:
    return StatsAggregator(task_store, clock)


@pytest.fixture()
def rollover(
    task_store: TaskStore,
    stats_store: StatsStore,
    aggregator: StatsAggregator,
    clock: FakeClock,
) -> RolloverCoordinator:
    return RolloverCoordinator(task_store, stats_store, aggregator, clock)


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FakeClock) -> AppState:
    """
    AppState wired through the real bootstrap.

    NOTE: We keep real SQLite stores here because their correctness is part of
    what we want to test.
    """
    return create_initial_state(settings=settings, clock=clock)

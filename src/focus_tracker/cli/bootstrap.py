# src/focus_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires stores, clock and engine pieces into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.clock import Clock, SystemClock, today
from ..core.state import AppState
from ..stats.aggregator import StatsAggregator
from ..stats.rollover import RolloverCoordinator
from ..stats.stats_store import StatsStore
from ..tasks.task_store import TaskStore
from ..tasks.timer_engine import TimerEngine

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.stats_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, clock: Clock | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and clock injectable makes the app easier to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    if clock is None:
        clock = SystemClock()

    _ensure_local_dirs(settings)

    task_store = TaskStore(settings.tasks_db_path, clock=clock)
    stats_store = StatsStore(settings.stats_db_path)
    aggregator = StatsAggregator(task_store, clock)

    # Tasks left over from a day the app never saw end must be rolled over on
    # the first check, so start from the oldest day still present.
    current = today(clock)
    dates = task_store.created_dates()
    last_checked = min(dates[0], current) if dates else current
    if last_checked != current:
        logger.info("Found tasks from %s; rollover pending.", last_checked)

    return AppState(
        settings=settings,
        clock=clock,
        task_store=task_store,
        stats_store=stats_store,
        timer=TimerEngine(task_store, clock),
        aggregator=aggregator,
        rollover=RolloverCoordinator(task_store, stats_store, aggregator, clock),
        last_checked_date=last_checked,
    )

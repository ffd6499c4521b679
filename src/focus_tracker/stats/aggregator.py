# stats/aggregator.py

from __future__ import annotations

import logging

from ..core.clock import Clock, date_key, day_bounds, elapsed_seconds, today
from ..core.ports import TaskRepo
from ..tasks.task_models import Task
from .stats_models import DailyStats, TaskBreakdownItem

logger = logging.getLogger(__name__)


def effective_time(task: Task, now: float) -> int:
    """total_time plus the live elapsed time of an open session (read-only)."""
    if task.current_session_start is None:
        return task.total_time
    return task.total_time + elapsed_seconds(task.current_session_start, now)


class StatsAggregator:
    """
    Builds DailyStats snapshots from the current task set.

    Snapshots are computed on every call and never cached: a running timer
    changes the result every second.
    """

    def __init__(self, task_store: TaskRepo, clock: Clock) -> None:
        self._tasks = task_store
        self._clock = clock

    def compute_today(self) -> DailyStats:
        return self.compute_for_date(today(self._clock))

    def compute_for_date(self, date: str) -> DailyStats:
        """
        Snapshot of the tasks whose created_at falls on `date`.

        Tasks keep the order the store returned them in; callers re-sort for display.
        """
        # A session still open on a past day only counts up to that day's end.
        now = min(self._clock.now(), day_bounds(date)[1])

        total_focus_time = 0
        completed_tasks = 0
        breakdown: list[TaskBreakdownItem] = []

        for task in self._tasks.get_all():
            if date_key(task.created_at) != date:
                continue

            task_time = effective_time(task, now)
            total_focus_time += task_time

            if task.completed:
                completed_tasks += 1

            if task_time > 0:
                breakdown.append(TaskBreakdownItem(title=task.title, time=task_time, completed=task.completed))

        logger.debug(
            "Stats computed date=%s focus=%s completed=%s items=%s",
            date,
            total_focus_time,
            completed_tasks,
            len(breakdown),
        )
        return DailyStats(
            date=date,
            total_focus_time=total_focus_time,
            completed_tasks=completed_tasks,
            task_breakdown=breakdown,
        )

# tasks/timer_engine.py

"""
Timer state transitions on a single task.

Per task the timer is either Stopped (current_session_start is None) or
Running. start opens a session; pause/stop close it and fold the elapsed whole
seconds into total_time. toggle_complete closes an open session before it flips
`completed`, so completing never loses in-flight time and a completed task is
never left running.

Each operation re-reads the task from the store before mutating and returns the
resulting Task, or None when the id does not exist.
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.clock import Clock, elapsed_seconds
from ..core.ports import TaskRepo
from .task_models import Task

logger = logging.getLogger(__name__)


def _close_session_fields(task: Task, now: float) -> dict[str, Any]:
    start = task.current_session_start
    if start is None:
        return {}
    elapsed = elapsed_seconds(start, now)
    return {"total_time": task.total_time + elapsed, "current_session_start": None}


class TimerEngine:
    def __init__(self, task_store: TaskRepo, clock: Clock) -> None:
        self._tasks = task_store
        self._clock = clock

    def start(self, task_id: int) -> Task | None:
        task = self._tasks.get_by_id(task_id)
        if task is None:
            return None
        if task.is_timer_running:
            return task

        updated = self._tasks.update(task_id, current_session_start=self._clock.now())
        logger.info("Timer started task_id=%s", task_id)
        return updated

    def pause(self, task_id: int) -> Task | None:
        task = self._tasks.get_by_id(task_id)
        if task is None:
            return None
        if not task.is_timer_running:
            return task

        updated = self._tasks.update(task_id, **_close_session_fields(task, self._clock.now()))
        if updated is not None:
            logger.info("Timer paused task_id=%s total_time=%s", task_id, updated.total_time)
        return updated

    def stop(self, task_id: int) -> Task | None:
        """Close the session from the full-screen timer; same end state as pause."""
        task = self._tasks.get_by_id(task_id)
        if task is None:
            return None
        if not task.is_timer_running:
            return task

        updated = self._tasks.update(task_id, **_close_session_fields(task, self._clock.now()))
        if updated is not None:
            logger.info("Timer stopped task_id=%s total_time=%s", task_id, updated.total_time)
        return updated

    def toggle_complete(self, task_id: int) -> Task | None:
        task = self._tasks.get_by_id(task_id)
        if task is None:
            return None

        fields: dict[str, Any] = {}
        if task.is_timer_running:
            fields.update(_close_session_fields(task, self._clock.now()))
        fields["completed"] = not task.completed

        # One update: the session close and the flip land together or not at all.
        updated = self._tasks.update(task_id, **fields)
        if updated is not None:
            logger.info("Task %s -> completed=%s total_time=%s", task_id, updated.completed, updated.total_time)
        return updated

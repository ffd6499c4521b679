# src/focus_tracker/tasks/task_api.py

"""
Small high-level task helpers used by the console (and any other front end).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ..core.state import AppState
from .task_models import Task

logger = logging.getLogger(__name__)


def add_task(
    state: AppState,
    *,
    title: str,
    description: str = "",
    due_at: float | None = None,
    pinned: bool = False,
) -> Task:
    return state.task_store.create(title=title, description=description, due_at=due_at, pinned=pinned)


def quick_add(state: AppState, title: str) -> Task | None:
    """Add from the full-screen timer; a blank title is ignored."""
    if not title or not title.strip():
        return None
    return state.task_store.create(title=title.strip())


def edit_task(state: AppState, task_id: int, **fields: Any) -> Task | None:
    return state.task_store.update(task_id, **fields)


def toggle_pin(state: AppState, task_id: int) -> Task | None:
    task = state.task_store.get_by_id(task_id)
    if task is None:
        return None
    return state.task_store.update(task_id, pinned=not task.pinned)


def remove_task(state: AppState, task_id: int) -> None:
    state.task_store.delete(task_id)
    logger.info("Task %s deleted", task_id)


def open_timer(state: AppState, task_id: int) -> Task | None:
    """Enter the full-screen timer: starts the task unless it is already running."""
    return state.timer.start(task_id)


def sort_for_display(tasks: Iterable[Task]) -> list[Task]:
    """Pinned first, then newest first."""
    return sorted(tasks, key=lambda t: (not t.pinned, -t.created_at, -t.id))


def split_active_completed(tasks: Iterable[Task]) -> tuple[list[Task], list[Task]]:
    active: list[Task] = []
    completed: list[Task] = []
    for t in tasks:
        (completed if t.completed else active).append(t)
    return active, completed

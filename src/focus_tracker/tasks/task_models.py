# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass

# Fields a caller may pass to TaskStore.update(); id and created_at are immutable.
MUTABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "due_at",
        "pinned",
        "completed",
        "total_time",
        "current_session_start",
    }
)


@dataclass(slots=True)
class Task:
    id: int
    title: str
    description: str
    due_at: float | None
    pinned: bool
    completed: bool

    # seconds folded in from closed sessions
    total_time: int
    current_session_start: float | None

    created_at: float

    @property
    def is_timer_running(self) -> bool:
        return self.current_session_start is not None

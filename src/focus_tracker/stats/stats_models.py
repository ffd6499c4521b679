# stats/stats_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class TaskBreakdownItem:
    title: str
    time: int
    completed: bool

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "time": self.time, "completed": self.completed}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> TaskBreakdownItem:
        return cls(
            title=str(raw.get("title") or ""),
            time=int(raw.get("time") or 0),
            completed=bool(raw.get("completed")),
        )


@dataclass(frozen=True, slots=True)
class DailyStats:
    """
    Statistics for one calendar date (YYYY-MM-DD).

    For "today" this is a computed snapshot; once archived by a rollover it is
    never rewritten with different content.
    """

    date: str
    total_focus_time: int
    completed_tasks: int
    task_breakdown: list[TaskBreakdownItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.total_focus_time == 0 and self.completed_tasks == 0

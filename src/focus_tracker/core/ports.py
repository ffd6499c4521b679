# src/focus_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the engine.

TimerEngine, StatsAggregator and RolloverCoordinator depend on these Protocols
instead of the SQLite stores, so storage stays swappable and tests can use
in-memory fakes.
"""

from typing import Any, Protocol

from ..stats.stats_models import DailyStats
from ..tasks.task_models import Task


class TaskRepo(Protocol):
    def create(
            self,
            *,
            title: str,
            description: str = "",
            due_at: float | None = None,
            pinned: bool = False,
    ) -> Task: ...

    def get_all(self) -> list[Task]: ...
    def get_by_id(self, task_id: int) -> Task | None: ...
    def update(self, task_id: int, **fields: Any) -> Task | None: ...
    def delete(self, task_id: int) -> None: ...

    # Rollover API
    def list_created_on(self, date: str) -> list[Task]: ...
    def delete_created_on(self, date: str) -> int: ...
    def created_dates(self) -> list[str]: ...


class StatsRepo(Protocol):
    def put(self, stats: DailyStats) -> None: ...
    def get_by_date(self, date: str) -> DailyStats | None: ...
    def get_all(self) -> list[DailyStats]: ...
    def clear(self) -> None: ...

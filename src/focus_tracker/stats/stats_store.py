# stats/stats_store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
from pathlib import Path
from typing import Any

from ..core.errors import storage_errors
from .stats_models import DailyStats, TaskBreakdownItem

logger = logging.getLogger(__name__)


class StatsStore:
    """
    SQLite store of archived daily statistics ("dailyStats" collection),
    keyed by calendar date.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "stats.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        with storage_errors("StatsStore schema setup"):
            self._ensure_schema()
        try:
            total = self.count()
        except Exception:
            total = -1
        logger.info("StatsStore ready db=%s total=%s", self._db_path, total)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS daily_stats (
                    date TEXT PRIMARY KEY,
                    total_focus_time INTEGER NOT NULL DEFAULT 0,
                    completed_tasks INTEGER NOT NULL DEFAULT 0,
                    task_breakdown TEXT NOT NULL DEFAULT '[]'
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _breakdown_to_str(items: list[TaskBreakdownItem]) -> str:
        return json.dumps([i.to_dict() for i in items], ensure_ascii=False)

    @staticmethod
    def _str_to_breakdown(s: str | None) -> list[TaskBreakdownItem]:
        if not s:
            return []
        try:
            val: Any = json.loads(s)
        except ValueError:
            logger.warning("Corrupt task_breakdown JSON; treating as empty.")
            return []
        if not isinstance(val, list):
            return []
        return [TaskBreakdownItem.from_dict(i) for i in val if isinstance(i, dict)]

    def _row_to_stats(self, row: sqlite3.Row) -> DailyStats:
        return DailyStats(
            date=str(row["date"]),
            total_focus_time=int(row["total_focus_time"] or 0),
            completed_tasks=int(row["completed_tasks"] or 0),
            task_breakdown=self._str_to_breakdown(row["task_breakdown"]),
        )

    # ---- public API ----

    def count(self) -> int:
        with storage_errors("count daily stats"):
            conn = self._get_conn()
            try:
                (n,) = conn.execute("SELECT COUNT(*) FROM daily_stats").fetchone()
                return int(n)
            finally:
                conn.close()

    def put(self, stats: DailyStats) -> None:
        """Upsert by date; an existing record for the same date is overwritten."""
        with storage_errors("put daily stats"):
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO daily_stats(date, total_focus_time, completed_tasks, task_breakdown)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(date) DO UPDATE SET
                        total_focus_time = excluded.total_focus_time,
                        completed_tasks = excluded.completed_tasks,
                        task_breakdown = excluded.task_breakdown
                    """,
                    (
                        stats.date,
                        int(stats.total_focus_time),
                        int(stats.completed_tasks),
                        self._breakdown_to_str(stats.task_breakdown),
                    ),
                )
                conn.commit()
            finally:
                conn.close()
        logger.debug(
            "Daily stats stored date=%s focus=%s completed=%s",
            stats.date,
            stats.total_focus_time,
            stats.completed_tasks,
        )

    def get_by_date(self, date: str) -> DailyStats | None:
        with storage_errors("get daily stats"):
            conn = self._get_conn()
            try:
                row = conn.execute("SELECT * FROM daily_stats WHERE date = ?", (date,)).fetchone()
                return self._row_to_stats(row) if row else None
            finally:
                conn.close()

    def get_all(self) -> list[DailyStats]:
        """All archived days, newest first."""
        with storage_errors("get_all daily stats"):
            conn = self._get_conn()
            try:
                rows = conn.execute("SELECT * FROM daily_stats ORDER BY date DESC").fetchall()
                return [self._row_to_stats(r) for r in rows]
            finally:
                conn.close()

    def clear(self) -> None:
        with storage_errors("clear daily stats"):
            conn = self._get_conn()
            try:
                conn.execute("DELETE FROM daily_stats")
                conn.commit()
            finally:
                conn.close()
        logger.info("Daily stats history cleared.")

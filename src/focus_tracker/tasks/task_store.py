# tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from pathlib import Path
from typing import Any

from ..core.clock import Clock, SystemClock, date_key, day_bounds
from ..core.errors import TaskValidationError, storage_errors
from .task_models import MUTABLE_FIELDS, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store ("tasks" collection).

    The table and its indexes are created if missing.

    Thread-safety:
    - each method opens its own SQLite connection

    Every public method either commits its whole write or raises StorageError
    with the transaction rolled back.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3", *, clock: Clock | None = None) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._clock: Clock = clock or SystemClock()
        with storage_errors("TaskStore schema setup"):
            self._ensure_schema()
        try:
            total = self.count_tasks()
        except Exception:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    due_at REAL,
                    pinned INTEGER NOT NULL DEFAULT 0,
                    completed INTEGER NOT NULL DEFAULT 0,
                    total_time INTEGER NOT NULL DEFAULT 0,
                    current_session_start REAL,
                    created_at REAL NOT NULL
                )
                """
            )

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_created_at ON tasks(created_at)")
            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_completed ON tasks(completed)")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            description=str(row["description"] or ""),
            due_at=float(row["due_at"]) if row["due_at"] is not None else None,
            pinned=bool(row["pinned"]),
            completed=bool(row["completed"]),
            total_time=int(row["total_time"] or 0),
            current_session_start=(
                float(row["current_session_start"]) if row["current_session_start"] is not None else None
            ),
            created_at=float(row["created_at"] or 0.0),
        )

    @staticmethod
    def _clean_title(title: Any) -> str:
        if not isinstance(title, str) or not title.strip():
            raise TaskValidationError("title is required")
        return title.strip()

    @classmethod
    def _validate_fields(cls, fields: dict[str, Any]) -> dict[str, Any]:
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise TaskValidationError(f"cannot update field(s): {', '.join(sorted(unknown))}")

        clean = dict(fields)
        if "title" in clean:
            clean["title"] = cls._clean_title(clean["title"])
        if "description" in clean:
            clean["description"] = str(clean["description"] or "")
        if "total_time" in clean:
            total = int(clean["total_time"])
            if total < 0:
                raise TaskValidationError("total_time must be >= 0")
            clean["total_time"] = total
        for flag in ("pinned", "completed"):
            if flag in clean:
                clean[flag] = bool(clean[flag])
        for ts_name in ("due_at", "current_session_start"):
            if ts_name in clean and clean[ts_name] is not None:
                clean[ts_name] = float(clean[ts_name])
        return clean

    # ---- public API ----

    def count_tasks(self) -> int:
        with storage_errors("count_tasks"):
            conn = self._get_conn()
            try:
                cur = conn.cursor()
                cur.execute("SELECT COUNT(*) FROM tasks")
                (n,) = cur.fetchone()
                return int(n)
            finally:
                conn.close()

    def create(
        self,
        *,
        title: str,
        description: str = "",
        due_at: float | None = None,
        pinned: bool = False,
    ) -> Task:
        clean_title = self._clean_title(title)
        now = self._clock.now()

        with storage_errors("create task"):
            conn = self._get_conn()
            try:
                cur = conn.cursor()
                cur.execute(
                    """
                    INSERT INTO tasks(
                        title, description, due_at, pinned,
                        completed, total_time, current_session_start, created_at
                    )
                    VALUES (?, ?, ?, ?, 0, 0, NULL, ?)
                    """,
                    (
                        clean_title,
                        str(description or ""),
                        float(due_at) if due_at is not None else None,
                        int(bool(pinned)),
                        float(now),
                    ),
                )
                conn.commit()
                rowid = cur.lastrowid
                if rowid is None:
                    raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            finally:
                conn.close()

        task = Task(
            id=int(rowid),
            title=clean_title,
            description=str(description or ""),
            due_at=float(due_at) if due_at is not None else None,
            pinned=bool(pinned),
            completed=False,
            total_time=0,
            current_session_start=None,
            created_at=float(now),
        )
        logger.debug("Task added id=%s title=%r created_at=%s", task.id, task.title, task.created_at)
        return task

    def get_all(self) -> list[Task]:
        with storage_errors("get_all tasks"):
            conn = self._get_conn()
            try:
                cur = conn.cursor()
                cur.execute("SELECT * FROM tasks")
                return [self._row_to_task(r) for r in cur.fetchall()]
            finally:
                conn.close()

    def get_by_id(self, task_id: int) -> Task | None:
        with storage_errors("get task"):
            conn = self._get_conn()
            try:
                cur = conn.cursor()
                cur.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),))
                row = cur.fetchone()
                return self._row_to_task(row) if row else None
            finally:
                conn.close()

    def update(self, task_id: int, **fields: Any) -> Task | None:
        """
        Shallow-merge `fields` over the stored task and persist the result.

        Fields not supplied are left untouched. Returns the merged task, or
        None if the id does not exist (nothing is written in that case).
        """
        clean = self._validate_fields(fields)

        with storage_errors("update task"):
            conn = self._get_conn()
            try:
                conn.execute("BEGIN IMMEDIATE")
                cur = conn.cursor()
                cur.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),))
                row = cur.fetchone()
                if row is None:
                    conn.rollback()
                    return None

                task = self._row_to_task(row)
                for name, value in clean.items():
                    setattr(task, name, value)

                if clean:
                    cur.execute(
                        """
                        UPDATE tasks
                        SET title = ?,
                            description = ?,
                            due_at = ?,
                            pinned = ?,
                            completed = ?,
                            total_time = ?,
                            current_session_start = ?
                        WHERE id = ?
                        """,
                        (
                            task.title,
                            task.description,
                            task.due_at,
                            int(task.pinned),
                            int(task.completed),
                            int(task.total_time),
                            task.current_session_start,
                            int(task_id),
                        ),
                    )
                conn.commit()
                return task
            except BaseException:
                with contextlib.suppress(Exception):
                    conn.rollback()
                raise
            finally:
                conn.close()

    def delete(self, task_id: int) -> None:
        with storage_errors("delete task"):
            conn = self._get_conn()
            try:
                conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
                conn.commit()
            finally:
                conn.close()

    # ---- day association (computed from created_at, never stored) ----

    def list_created_on(self, date: str) -> list[Task]:
        start, end = day_bounds(date)
        with storage_errors("list tasks by date"):
            conn = self._get_conn()
            try:
                cur = conn.cursor()
                cur.execute(
                    "SELECT * FROM tasks WHERE created_at >= ? AND created_at < ? ORDER BY id ASC",
                    (start, end),
                )
                return [self._row_to_task(r) for r in cur.fetchall()]
            finally:
                conn.close()

    def delete_created_on(self, date: str) -> int:
        """Delete every task created on `date`. Returns the number of rows removed."""
        start, end = day_bounds(date)
        with storage_errors("purge tasks by date"):
            conn = self._get_conn()
            try:
                cur = conn.cursor()
                cur.execute("DELETE FROM tasks WHERE created_at >= ? AND created_at < ?", (start, end))
                conn.commit()
                return int(cur.rowcount)
            finally:
                conn.close()

    def created_dates(self) -> list[str]:
        """Distinct calendar dates that still have tasks, oldest first."""
        with storage_errors("list task dates"):
            conn = self._get_conn()
            try:
                cur = conn.cursor()
                cur.execute("SELECT created_at FROM tasks")
                return sorted({date_key(float(r["created_at"] or 0.0)) for r in cur.fetchall()})
            finally:
                conn.close()

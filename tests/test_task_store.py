# tests/test_task_store.py

from __future__ import annotations

import sqlite3

import pytest

from focus_tracker.core.errors import StorageError, TaskValidationError
from focus_tracker.tasks.task_store import TaskStore

from .fakes import FakeClock, ts


def test_task_create_get_update_delete(task_store: TaskStore, clock: FakeClock) -> None:
    task = task_store.create(title="  Write report  ", description="Q4 numbers")
    assert task.id > 0
    assert task.title == "Write report"
    assert task.created_at == ts("2024-01-01T10:00:00")
    assert task.total_time == 0
    assert task.completed is False
    assert task.pinned is False
    assert task.is_timer_running is False
    assert task.due_at is None

    fetched = task_store.get_by_id(task.id)
    assert fetched == task

    clock.advance(3600)
    updated = task_store.update(task.id, pinned=True, due_at=ts("2024-01-01T18:00:00"))
    assert updated is not None
    assert updated.pinned is True
    assert updated.due_at == ts("2024-01-01T18:00:00")
    # untouched fields keep their values
    assert updated.title == "Write report"
    assert updated.description == "Q4 numbers"
    assert updated.created_at == task.created_at

    assert task_store.get_by_id(task.id) == updated

    task_store.delete(task.id)
    assert task_store.get_by_id(task.id) is None
    assert task_store.get_all() == []


def test_update_can_clear_nullable_fields(task_store: TaskStore) -> None:
    task = task_store.create(title="A", due_at=ts("2024-01-02T00:00:00"))
    updated = task_store.update(task.id, due_at=None)
    assert updated is not None
    assert updated.due_at is None
    assert task_store.get_by_id(task.id).due_at is None


def test_ids_are_unique(task_store: TaskStore) -> None:
    ids = {task_store.create(title=f"t{i}").id for i in range(5)}
    assert len(ids) == 5
    assert task_store.count_tasks() == 5


def test_missing_task_is_none_not_error(task_store: TaskStore) -> None:
    assert task_store.get_by_id(999) is None
    assert task_store.update(999, title="x") is None
    task_store.delete(999)  # idempotent no-op
    task = task_store.create(title="A")
    task_store.delete(task.id)
    task_store.delete(task.id)
    assert task_store.count_tasks() == 0


@pytest.mark.parametrize("title", ["", "   ", None])
def test_blank_title_is_rejected(task_store: TaskStore, title) -> None:
    with pytest.raises(TaskValidationError):
        task_store.create(title=title)
    assert task_store.count_tasks() == 0


def test_invalid_updates_are_rejected_before_writing(task_store: TaskStore) -> None:
    task = task_store.create(title="A")

    with pytest.raises(TaskValidationError):
        task_store.update(task.id, title="  ")
    with pytest.raises(TaskValidationError):
        task_store.update(task.id, created_at=0.0)
    with pytest.raises(TaskValidationError):
        task_store.update(task.id, id=42)
    with pytest.raises(TaskValidationError):
        task_store.update(task.id, total_time=-1)

    assert task_store.get_by_id(task.id) == task


def test_day_association_queries(task_store: TaskStore, clock: FakeClock) -> None:
    a = task_store.create(title="A")
    clock.set("2024-01-01T23:59:59")
    b = task_store.create(title="B")
    clock.set("2024-01-02T00:00:00")
    c = task_store.create(title="C")

    assert [t.id for t in task_store.list_created_on("2024-01-01")] == [a.id, b.id]
    assert [t.id for t in task_store.list_created_on("2024-01-02")] == [c.id]
    assert task_store.created_dates() == ["2024-01-01", "2024-01-02"]

    assert task_store.delete_created_on("2024-01-01") == 2
    assert task_store.delete_created_on("2024-01-01") == 0
    assert [t.id for t in task_store.get_all()] == [c.id]


def test_data_survives_reopen(settings, clock: FakeClock) -> None:
    store = TaskStore(settings.tasks_db_path, clock=clock)
    task = store.create(title="Persist me")
    store.update(task.id, total_time=42, completed=True)

    reopened = TaskStore(settings.tasks_db_path, clock=clock)
    again = reopened.get_by_id(task.id)
    assert again is not None
    assert again.total_time == 42
    assert again.completed is True


def test_storage_failure_is_raised_as_storage_error(task_store: TaskStore, monkeypatch) -> None:
    task = task_store.create(title="A")

    def broken_conn():
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(task_store, "_get_conn", broken_conn)

    with pytest.raises(StorageError) as exc_info:
        task_store.update(task.id, title="B")
    assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)

    with pytest.raises(StorageError):
        task_store.get_all()

    monkeypatch.undo()
    assert task_store.get_by_id(task.id).title == "A"

# tests/test_timer_engine.py

from __future__ import annotations

from focus_tracker.tasks.task_store import TaskStore
from focus_tracker.tasks.timer_engine import TimerEngine, _close_session_fields

from .fakes import FakeClock, ts


def _assert_timer_invariant(task) -> None:
    assert task.is_timer_running == (task.current_session_start is not None)
    assert task.total_time >= 0


def test_start_then_pause_accumulates_whole_seconds(
    task_store: TaskStore, timer: TimerEngine, clock: FakeClock
) -> None:
    task = task_store.create(title="Write report")

    started = timer.start(task.id)
    assert started is not None
    assert started.is_timer_running is True
    assert started.current_session_start == ts("2024-01-01T10:00:00")
    assert started.total_time == 0

    clock.set("2024-01-01T10:05:30")
    paused = timer.pause(task.id)
    assert paused is not None
    assert paused.total_time == 330
    assert paused.is_timer_running is False
    assert paused.current_session_start is None
    assert task_store.get_by_id(task.id) == paused


def test_start_is_idempotent(task_store: TaskStore, timer: TimerEngine, clock: FakeClock) -> None:
    task = task_store.create(title="A")
    timer.start(task.id)
    clock.advance(10)
    again = timer.start(task.id)

    assert again.current_session_start == ts("2024-01-01T10:00:00")
    assert again.total_time == 0


def test_double_pause_is_noop(task_store: TaskStore, timer: TimerEngine, clock: FakeClock) -> None:
    task = task_store.create(title="A")
    timer.start(task.id)
    clock.advance(5)
    first = timer.pause(task.id)
    clock.advance(100)
    second = timer.pause(task.id)

    assert first.total_time == 5
    assert second == first


def test_stop_converges_with_pause(task_store: TaskStore, timer: TimerEngine, clock: FakeClock) -> None:
    a = task_store.create(title="A")
    b = task_store.create(title="B")
    timer.start(a.id)
    timer.start(b.id)
    clock.advance(42)

    paused = timer.pause(a.id)
    stopped = timer.stop(b.id)
    assert (paused.total_time, paused.is_timer_running) == (stopped.total_time, stopped.is_timer_running)

    # stopping an already stopped task changes nothing
    assert timer.stop(b.id) == stopped


def test_sub_second_truncation_is_per_session(
    task_store: TaskStore, timer: TimerEngine, clock: FakeClock
) -> None:
    task = task_store.create(title="A")
    for _ in range(3):
        timer.start(task.id)
        clock.advance(1.9)
        timer.pause(task.id)

    # 3 * floor(1.9), never floor(5.7)
    assert task_store.get_by_id(task.id).total_time == 3


def test_toggle_complete_closes_running_session(
    task_store: TaskStore, timer: TimerEngine, clock: FakeClock
) -> None:
    task = task_store.create(title="A")
    timer.start(task.id)
    clock.advance(90)

    done = timer.toggle_complete(task.id)
    assert done.completed is True
    assert done.is_timer_running is False
    assert done.total_time == 90
    _assert_timer_invariant(done)

    undone = timer.toggle_complete(task.id)
    assert undone.completed is False
    assert undone.total_time == 90


def test_total_time_never_decreases(task_store: TaskStore, timer: TimerEngine, clock: FakeClock) -> None:
    task = task_store.create(title="A")
    seen = [0]
    for op in ("start", "pause", "pause", "start", "stop", "start", "toggle_complete", "toggle_complete"):
        clock.advance(7)
        result = getattr(timer, op)(task.id)
        _assert_timer_invariant(result)
        assert result.total_time >= seen[-1]
        seen.append(result.total_time)

    assert seen[-1] == 21


def test_clock_stepping_backwards_adds_nothing(
    task_store: TaskStore, timer: TimerEngine, clock: FakeClock
) -> None:
    task = task_store.create(title="A")
    timer.start(task.id)
    clock.advance(-30)
    assert timer.pause(task.id).total_time == 0


def test_missing_task_returns_none(timer: TimerEngine, task_store: TaskStore) -> None:
    assert timer.start(404) is None
    assert timer.pause(404) is None
    assert timer.stop(404) is None
    assert timer.toggle_complete(404) is None
    assert task_store.count_tasks() == 0


def test_closing_a_stopped_task_changes_nothing(task_store: TaskStore, clock: FakeClock) -> None:
    task = task_store.create(title="A")
    assert _close_session_fields(task, clock.now() + 50) == {}

    running = task_store.update(task.id, current_session_start=clock.now())
    assert _close_session_fields(running, clock.now() + 50) == {
        "total_time": 50,
        "current_session_start": None,
    }

# src/focus_tracker/stats/rollover_scheduler.py

from __future__ import annotations

"""
Rollover scheduler.

A small polling loop that:
- checks for a day boundary once on start,
- re-checks every interval_seconds,
- wakes up right after midnight so the worst-case staleness stays bounded,
- hands the new date to on_rollover so the caller can update its bookkeeping.

The loop never retries a failed rollover itself; it logs and tries again on the
next tick.
"""

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from ..core.clock import Clock, seconds_until_midnight
from ..core.state import AppState
from .rollover import RolloverCoordinator

logger = logging.getLogger(__name__)

# Extra delay after midnight so the clock has definitely crossed the boundary.
_MIDNIGHT_SLACK_SECONDS = 1.0


def next_sleep_seconds(now_ts: float, interval_seconds: float) -> float:
    return max(0.01, min(float(interval_seconds), seconds_until_midnight(now_ts) + _MIDNIGHT_SLACK_SECONDS))


async def run_rollover_scheduler(
        coordinator: RolloverCoordinator,
        *,
        last_checked_date: str,
        clock: Clock,
        interval_seconds: float = 60.0,
        on_rollover: Callable[[str], None] | None = None,
        lock: contextlib.AbstractContextManager | None = None,
) -> None:
    """
    Call coordinator.check_and_roll(...) on start and then periodically.

    To stop the scheduler, cancel the coroutine/task.
    """
    last = last_checked_date

    while True:
        try:
            with lock if lock is not None else contextlib.nullcontext():
                new_date = coordinator.check_and_roll(last)
        except Exception:
            logger.exception("check_and_roll failed last_checked_date=%s", last)
            new_date = None

        if new_date is not None:
            last = new_date
            if on_rollover is not None:
                try:
                    on_rollover(new_date)
                except Exception:
                    logger.exception("on_rollover callback failed date=%s", new_date)

        await asyncio.sleep(next_sleep_seconds(clock.now(), interval_seconds))


@dataclass
class RolloverBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    task: asyncio.Task

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.task.cancel)
        except Exception:
            logger.debug("Failed to signal rollover stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_rollover_in_background(state: AppState) -> RolloverBackgroundRunner | None:
    """
    Run the rollover scheduler in a background thread with its own event loop
    (the console REPL blocks the main thread on input()).
    """
    interval = float(getattr(state.settings, "rollover_interval_seconds", 60))

    def _on_rollover(new_date: str) -> None:
        with state.lock:
            state.last_checked_date = new_date

    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        task = loop.create_task(
            run_rollover_scheduler(
                state.rollover,
                last_checked_date=state.last_checked_date,
                clock=state.clock,
                interval_seconds=interval,
                on_rollover=_on_rollover,
                lock=state.lock,
            )
        )

        holder["loop"] = loop
        holder["task"] = task
        ready.set()

        try:
            with contextlib.suppress(asyncio.CancelledError):
                loop.run_until_complete(task)
        finally:
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="rollover-scheduler", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    task = holder.get("task")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(task, asyncio.Task):
        logger.error("Rollover thread did not initialize properly.")
        return None

    logger.info("Rollover scheduler started (interval=%ss).", interval)
    return RolloverBackgroundRunner(thread=t, loop=loop, task=task)

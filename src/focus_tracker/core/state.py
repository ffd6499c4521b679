# src/focus_tracker/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from ..stats.aggregator import StatsAggregator
from ..stats.rollover import RolloverCoordinator
from ..stats.stats_store import StatsStore
from ..tasks.task_store import TaskStore
from ..tasks.timer_engine import TimerEngine
from .clock import Clock


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    clock: Clock
    task_store: TaskStore
    stats_store: StatsStore
    timer: TimerEngine
    aggregator: StatsAggregator
    rollover: RolloverCoordinator

    # Date of the last rollover check (YYYY-MM-DD), owned by the caller side.
    last_checked_date: str

    # Serializes engine calls between the console and the rollover thread.
    lock: threading.RLock = field(default_factory=threading.RLock)

# stats/history.py

from __future__ import annotations

from ..core.ports import StatsRepo
from .aggregator import StatsAggregator
from .stats_models import DailyStats


def history_with_today(stats_store: StatsRepo, aggregator: StatsAggregator) -> list[DailyStats]:
    """
    Archived history (newest first) with today's live snapshot on top.

    Today is included only when it has activity and was not archived already.
    """
    history = stats_store.get_all()
    live = aggregator.compute_today()
    if live.is_empty or any(h.date == live.date for h in history):
        return history
    return [live, *history]

# stats/rollover.py

from __future__ import annotations

import logging

from ..core.clock import Clock, today
from ..core.ports import StatsRepo, TaskRepo
from .aggregator import StatsAggregator

logger = logging.getLogger(__name__)


class RolloverCoordinator:
    """
    Day-boundary transition: archive a finished day's stats, purge its tasks.

    Tasks never carry over to the next day (completed or not). Running the
    rollover again for a day that was already archived and purged leaves the
    archived record as it is.
    """

    def __init__(
        self,
        task_store: TaskRepo,
        stats_store: StatsRepo,
        aggregator: StatsAggregator,
        clock: Clock,
    ) -> None:
        self._tasks = task_store
        self._stats = stats_store
        self._aggregator = aggregator
        self._clock = clock

    def check_and_roll(self, last_checked_date: str) -> str | None:
        """
        Roll over if the current date differs from last_checked_date.

        Returns the new current date, or None when the day has not changed.
        Besides last_checked_date, any older day that still has tasks (e.g. the
        process was down for several days) is archived and purged too.
        """
        current = today(self._clock)
        if last_checked_date == current:
            return None

        stale = {d for d in self._tasks.created_dates() if d < current}
        if last_checked_date < current:
            stale.add(last_checked_date)

        for date in sorted(stale):
            self._archive_day(date)

        logger.info("Rollover complete: %s -> %s (archived %d day(s))", last_checked_date, current, len(stale))
        return current

    def _archive_day(self, date: str) -> None:
        day_tasks = self._tasks.list_created_on(date)
        if not day_tasks and self._stats.get_by_date(date) is not None:
            logger.debug("Day %s already archived and purged; skipping.", date)
            return

        snapshot = self._aggregator.compute_for_date(date)
        self._stats.put(snapshot)
        purged = self._tasks.delete_created_on(date)
        logger.info(
            "Archived day=%s focus=%s completed=%s purged_tasks=%s",
            date,
            snapshot.total_focus_time,
            snapshot.completed_tasks,
            purged,
        )

    def clear_history(self) -> None:
        self._stats.clear()

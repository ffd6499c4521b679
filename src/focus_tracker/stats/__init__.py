"""
Daily statistics subsystem.

Components:
- stats_models.py: DailyStats, TaskBreakdownItem
- stats_store.py: SQLite-backed archive keyed by date
- aggregator.py: live snapshots computed from tasks
- rollover.py: day-boundary archival and purge
- rollover_scheduler.py: polling loop that drives the rollover
- history.py: archived history merged with today's snapshot
"""

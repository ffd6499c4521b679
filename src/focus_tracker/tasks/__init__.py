"""
Task subsystem.

Components:
- task_models.py: data structures (Task)
- task_store.py: SQLite-backed storage + day-association queries
- timer_engine.py: start/pause/stop/toggle-complete transitions
- task_api.py: small high-level helpers used by the console
"""

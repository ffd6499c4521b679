# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "FOCUS_APP_NAME": "App display name (default: focus).",
    "FOCUS_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "FOCUS_LOG_FILE": "Debug log file (default: <data_dir>/focus.log; 'off' disables it).",
    # Console
    "FOCUS_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Paths (gitignored)
    "FOCUS_DATA_DIR": "Local data directory (default: .local/focus).",
    "FOCUS_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    "FOCUS_STATS_DB_PATH": "StatsStore SQLite path (default: <data_dir>/stats.sqlite3).",
    # Scheduling
    "FOCUS_ROLLOVER_INTERVAL_SECONDS": (
        "How often to check for a new day (default: 60, minimum 1). "
        "The scheduler also wakes right after UTC midnight."
    ),
}

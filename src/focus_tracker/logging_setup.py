# src/focus_tracker/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

APP_LOGGER = "focus_tracker"

# Chatter from these would interleave with the console prompt: the rollover
# loop runs in its own thread, the stores log on every startup.
BACKGROUND_LOGGERS = (
    "focus_tracker.stats.rollover_scheduler",
    "focus_tracker.stats.rollover",
    "focus_tracker.tasks.task_store",
    "focus_tracker.stats.stats_store",
)

_CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(threadName)s %(name)s: %(message)s"

# Marks handlers installed here so a second setup call replaces only those.
_OWNED = "_focus_tracker_handler"


class ConsoleFilter(logging.Filter):
    """
    Console policy:
    - focus_tracker records pass, except background loggers below `background_level`
    - everything else (third-party, py.warnings) only at ERROR+
    """

    def __init__(self, background_level: int = logging.WARNING) -> None:
        super().__init__()
        self.background_level = background_level

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name != APP_LOGGER and not name.startswith(APP_LOGGER + "."):
            return record.levelno >= logging.ERROR
        if name.startswith(BACKGROUND_LOGGERS):
            return record.levelno >= self.background_level
        return True


def _own(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNED, True)
    return handler


def setup_logging(
    *,
    log_file: str | Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    background_level: int = logging.WARNING,
) -> None:
    """
    Console handler on stderr plus, when log_file is given, a full debug log.

    Safe to call again (e.g. after settings change): handlers from a previous
    call are replaced, handlers installed by others are left alone.
    """
    root = logging.getLogger()
    root.setLevel(console_level if log_file is None else min(console_level, file_level))

    for h in list(root.handlers):
        if getattr(h, _OWNED, False):
            root.removeHandler(h)
            h.close()

    console = _own(logging.StreamHandler(sys.stderr))
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    console.addFilter(ConsoleFilter(background_level))
    root.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = _own(logging.FileHandler(str(path), encoding="utf-8"))
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(fh)

    logging.captureWarnings(True)

# src/focus_tracker/core/errors.py

"""
Failure signals raised by the core.

"Not found" is not an exception here: lookups and timer operations return None.
"""

from __future__ import annotations

import contextlib
import sqlite3
from collections.abc import Iterator


class TaskValidationError(ValueError):
    """Rejected input (blank title, negative time, immutable field)."""


class StorageError(RuntimeError):
    """The underlying store failed; nothing was persisted by the failed call."""


@contextlib.contextmanager
def storage_errors(action: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as exc:
        raise StorageError(f"{action} failed: {exc}") from exc

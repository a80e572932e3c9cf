"""SQLite file location and schema for the slot store.

The database holds one table, ``slots``: slot name -> serialized snapshot.
Connections are short-lived; open one with get_connection() and close it in
a finally block.
"""

import os
import sqlite3
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path

DEFAULT_DB_DIR = Path.home() / ".meal_calendar"
DB_FILENAME = "meal_calendar.db"

_active_path: ContextVar["Path | None"] = ContextVar("_active_path", default=None)


@contextmanager
def override_db_path(path: Path):
    """Point every path lookup in this task/thread at path until the block exits."""
    token = _active_path.set(Path(path))
    try:
        yield
    finally:
        _active_path.reset(token)


def get_db_path() -> Path:
    """override_db_path() wins, then DB_PATH, then ~/.meal_calendar/meal_calendar.db.

    The parent directory of an env or default path is created on demand.
    """
    path = _active_path.get()
    if path is not None:
        return path
    configured = os.environ.get("DB_PATH")
    path = Path(configured) if configured else DEFAULT_DB_DIR / DB_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def get_connection(db_path: Path = None) -> sqlite3.Connection:
    conn = sqlite3.connect(str(db_path or get_db_path()))
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: Path = None) -> None:
    """Create the slots table if missing.  Safe to call repeatedly."""
    conn = get_connection(db_path)
    try:
        conn.execute(
            """CREATE TABLE IF NOT EXISTS slots (
                   name       TEXT PRIMARY KEY,
                   value      TEXT,
                   updated_at TEXT DEFAULT CURRENT_TIMESTAMP
               )"""
        )
        conn.commit()
    finally:
        conn.close()

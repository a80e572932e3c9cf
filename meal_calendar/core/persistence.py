"""Persistence gateway — whole-structure snapshots stored in named slots.

Each store owns one slot and writes its full serialized state after every
mutation.  load() never raises: absent or malformed data comes back as None
and the caller falls back to its empty initial state.  If the substrate is
unavailable, save() logs and returns False so the app keeps working in memory.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Optional, Protocol

from meal_calendar.db.database import get_connection, init_db

logger = logging.getLogger(__name__)

PLAN_SLOT = "mealPlans.v1"
SUGGESTIONS_SLOT = "mealSuggestions.v1"
SHOPPING_SLOT = "shoppingList.v1"


class PersistenceGateway(Protocol):
    def save(self, slot_name: str, value: Any) -> bool: ...

    def load(self, slot_name: str) -> Optional[Any]: ...


def _encode(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _decode(slot_name: str, raw: Optional[str]) -> Optional[Any]:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Discarding malformed data in slot %s", slot_name)
        return None


class MemoryGateway:
    """Dict-backed gateway.  Stores serialized text so loads return fresh copies."""

    def __init__(self, initial: dict[str, str] = None):
        self.raw: dict[str, str] = dict(initial or {})

    def save(self, slot_name: str, value: Any) -> bool:
        self.raw[slot_name] = _encode(value)
        return True

    def load(self, slot_name: str) -> Optional[Any]:
        return _decode(slot_name, self.raw.get(slot_name))


class SqliteGateway:
    """Gateway backed by the ``slots`` table of the application database.

    db_path=None resolves the active path on every call (see get_db_path).
    """

    def __init__(self, db_path: Path = None):
        self.db_path = db_path
        self._ready = False

    def _connect(self) -> sqlite3.Connection:
        if not self._ready:
            init_db(self.db_path)
            self._ready = True
        return get_connection(self.db_path)

    def save(self, slot_name: str, value: Any) -> bool:
        """Insert or update the slot's serialized snapshot (upsert)."""
        try:
            text = _encode(value)
        except (TypeError, ValueError):
            logger.warning("Slot %s value is not JSON serializable; not saved", slot_name)
            return False
        try:
            conn = self._connect()
            try:
                conn.execute(
                    """INSERT INTO slots (name, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)
                       ON CONFLICT(name) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at""",
                    (slot_name, text),
                )
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, OSError):
            logger.warning("Could not persist slot %s; keeping in-memory state", slot_name, exc_info=True)
            self._ready = False
            return False
        return True

    def load(self, slot_name: str) -> Optional[Any]:
        """Return the decoded slot value, or None if absent, malformed or unreadable."""
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT value FROM slots WHERE name = ?", (slot_name,)).fetchone()
            finally:
                conn.close()
        except (sqlite3.Error, OSError):
            logger.warning("Could not read slot %s; starting empty", slot_name, exc_info=True)
            self._ready = False
            return None
        return _decode(slot_name, row["value"] if row else None)

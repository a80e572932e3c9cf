"""Environment-driven settings.

Values are read at call time so tests can change them via the environment.

Known variables:
    DB_PATH                        — SQLite file used by the sqlite gateway.
    MEAL_CALENDAR_PERSISTENCE      — "sqlite" (default) or "memory".
    MEAL_CALENDAR_SUGGESTION_LIMIT — per-category autocomplete cap (default 200).
    MEAL_CALENDAR_HOLIDAYS         — comma-separated YYYY-MM-DD keys shown as holidays.
    LOG_LEVEL                      — logging level name (default WARNING).
"""

import logging
import os

DEFAULT_SUGGESTION_LIMIT = 200

logger = logging.getLogger(__name__)


def get_setting(key: str, default: str = None) -> str:
    """Return the environment value for key, or default if unset or blank."""
    value = os.environ.get(key, "").strip()
    return value if value else default


def suggestion_limit() -> int:
    raw = get_setting("MEAL_CALENDAR_SUGGESTION_LIMIT")
    if raw is None:
        return DEFAULT_SUGGESTION_LIMIT
    try:
        limit = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer MEAL_CALENDAR_SUGGESTION_LIMIT=%r", raw)
        return DEFAULT_SUGGESTION_LIMIT
    return limit if limit > 0 else DEFAULT_SUGGESTION_LIMIT


def persistence_backend() -> str:
    return get_setting("MEAL_CALENDAR_PERSISTENCE", "sqlite").lower()


def holidays() -> frozenset[str]:
    """Return the configured holiday DateKeys (empty unless configured)."""
    raw = get_setting("MEAL_CALENDAR_HOLIDAYS", "")
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


def configure_logging() -> None:
    """Apply LOG_LEVEL to the root logger.  Called once from app startup."""
    level_name = get_setting("LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

"""Autocomplete candidates learned from saved plan entries.

Each category keeps a bounded, insertion-ordered set of distinct values.
When a new value pushes a category past its limit the oldest value is
evicted.  Values are never removed otherwise.
"""

import logging
from collections import OrderedDict
from typing import Iterable, Optional

from meal_calendar import config
from meal_calendar.core.persistence import SUGGESTIONS_SLOT, PersistenceGateway
from meal_calendar.db.models import CATEGORIES

logger = logging.getLogger(__name__)


class BoundedOrderedSet:
    """Distinct strings in insertion order, capped at limit (oldest evicted)."""

    def __init__(self, limit: int, values: Iterable[str] = ()):
        self.limit = limit
        self._items: OrderedDict[str, None] = OrderedDict()
        for value in values:
            self.add(value)

    def add(self, value: str) -> bool:
        """Add value if absent.  Returns True if the set changed."""
        if value in self._items:
            return False
        self._items[value] = None
        while len(self._items) > self.limit:
            self._items.popitem(last=False)
        return True

    def __contains__(self, value) -> bool:
        return value in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)


class SuggestionIndex:
    def __init__(self, gateway: Optional[PersistenceGateway] = None, limit: int = None,
                 initial: dict = None):
        self.gateway = gateway
        self.limit = limit if limit is not None else config.suggestion_limit()
        initial = initial or {}
        self._sets = {
            category: BoundedOrderedSet(self.limit, initial.get(category, ()))
            for category in CATEGORIES
        }

    @classmethod
    def load(cls, gateway: PersistenceGateway, limit: int = None) -> "SuggestionIndex":
        """Build the index from the gateway's suggestion slot, dropping anything malformed."""
        return cls(gateway, limit=limit, initial=_clean_snapshot(gateway.load(SUGGESTIONS_SLOT)))

    def _add(self, category: str, value) -> bool:
        if category not in self._sets or not isinstance(value, str):
            return False
        value = value.strip()
        if not value:
            return False
        return self._sets[category].add(value)

    def record(self, category: str, value: str) -> None:
        """Remember value for category's autocomplete list and persist if it was new."""
        if self._add(category, value):
            self._persist()

    def record_entry(self, entry: dict) -> None:
        """Record every category value of a saved entry, persisting once."""
        changed = False
        for category in CATEGORIES:
            if self._add(category, entry.get(category)):
                changed = True
        if changed:
            self._persist()

    def lookup(self, category: str) -> list[str]:
        if category not in self._sets:
            return []
        return list(self._sets[category])

    def snapshot(self) -> dict[str, list[str]]:
        return {category: list(values) for category, values in self._sets.items()}

    def _persist(self) -> None:
        if self.gateway is not None:
            self.gateway.save(SUGGESTIONS_SLOT, self.snapshot())


def _clean_snapshot(data) -> dict[str, list[str]]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Suggestion data is not a mapping; starting empty")
        return {}
    cleaned = {}
    for category in CATEGORIES:
        values = data.get(category)
        if values is None:
            continue
        if not isinstance(values, list):
            logger.warning("Dropping malformed suggestions for %s", category)
            continue
        cleaned[category] = [v.strip() for v in values if isinstance(v, str) and v.strip()]
    return cleaned

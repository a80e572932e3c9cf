"""Meal plan records keyed by calendar date.

The plan is sparse: a date key exists only once one of its slots has been
saved.  Each (date, slot) holds an entry mapping category -> text; saving an
entry replaces the previous one for that slot outright.
"""

import logging
from typing import Optional

from meal_calendar.core.calendar import day_label, parse_key, to_key
from meal_calendar.core.persistence import PLAN_SLOT, PersistenceGateway
from meal_calendar.core.suggestions import SuggestionIndex
from meal_calendar.db.models import CATEGORIES, MEAL_SLOTS, DaySummary

logger = logging.getLogger(__name__)

SUMMARY_SEPARATOR = "、"


def clean_entry(entry: Optional[dict]) -> dict[str, str]:
    """Trim values and drop empty ones and unknown categories.  Non-mappings clean to {}."""
    cleaned = {}
    if not isinstance(entry, dict):
        return cleaned
    for category in CATEGORIES:
        value = entry.get(category)
        if not isinstance(value, str):
            continue
        value = value.strip()
        if value:
            cleaned[category] = value
    return cleaned


def summarize(entry: Optional[dict]) -> str:
    """Join the entry's values in category order, e.g. 'rice、egg'."""
    return SUMMARY_SEPARATOR.join(clean_entry(entry).values())


class MealPlanStore:
    def __init__(self, gateway: Optional[PersistenceGateway] = None,
                 suggestions: Optional[SuggestionIndex] = None, initial: dict = None):
        self.gateway = gateway
        self.suggestions = suggestions
        self._plans: dict[str, dict[str, dict[str, str]]] = initial or {}

    @classmethod
    def load(cls, gateway: PersistenceGateway, suggestions: SuggestionIndex = None) -> "MealPlanStore":
        return cls(gateway, suggestions, initial=_clean_plans(gateway.load(PLAN_SLOT)))

    def get_entry(self, d, slot: str) -> dict[str, str]:
        """Return a copy of the entry saved for (d, slot), or {} if none."""
        return dict(self._plans.get(to_key(d), {}).get(slot, {}))

    def get_day(self, d) -> dict[str, dict[str, str]]:
        by_slot = self._plans.get(to_key(d), {})
        return {slot: dict(by_slot[slot]) for slot in MEAL_SLOTS if slot in by_slot}

    def summarize(self, entry: Optional[dict]) -> str:
        return summarize(entry)

    def save_entry(self, d, slot: str, entry: Optional[dict]) -> Optional[dict[str, str]]:
        """Replace the entry for (d, slot) with the cleaned form of entry.

        Every non-empty value is also recorded as an autocomplete suggestion.
        Returns the stored entry, or None if slot is not a meal slot.
        """
        if slot not in MEAL_SLOTS:
            logger.debug("Ignoring save for unknown slot %r", slot)
            return None
        cleaned = clean_entry(entry)
        key = to_key(d)
        self._plans.setdefault(key, {})[slot] = cleaned
        logger.debug("Saved %s/%s: %s", key, slot, cleaned)
        if self.gateway is not None:
            self.gateway.save(PLAN_SLOT, self.snapshot())
        if self.suggestions is not None:
            self.suggestions.record_entry(cleaned)
        return dict(cleaned)

    def planned_slots(self, d) -> list[str]:
        """Slots on d that have something to show, in slot order."""
        by_slot = self._plans.get(to_key(d), {})
        return [slot for slot in MEAL_SLOTS if summarize(by_slot.get(slot))]

    def week_overview(self, days) -> list[DaySummary]:
        overview = []
        for d in days:
            by_slot = self._plans.get(to_key(d), {})
            overview.append(DaySummary(
                date=d,
                key=to_key(d),
                label=day_label(d),
                summaries={slot: summarize(by_slot.get(slot)) for slot in MEAL_SLOTS},
            ))
        return overview

    def snapshot(self) -> dict:
        """Serializable copy with dates and slots in a stable order."""
        return {
            key: {slot: dict(self._plans[key][slot]) for slot in MEAL_SLOTS if slot in self._plans[key]}
            for key in sorted(self._plans)
        }


def _clean_plans(data) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Meal plan data is not a mapping; starting empty")
        return {}
    plans = {}
    for key, by_slot in data.items():
        if parse_key(key) is None or not isinstance(by_slot, dict):
            logger.warning("Dropping malformed meal plan record %r", key)
            continue
        slots = {
            slot: clean_entry(entry)
            for slot, entry in by_slot.items()
            if slot in MEAL_SLOTS and isinstance(entry, dict)
        }
        if slots:
            plans[key] = slots
    return plans

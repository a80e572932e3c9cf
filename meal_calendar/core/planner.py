"""Planner — the three stores sharing one persistence gateway.

The planner is created once (at app startup, or per test) and handed to
whoever needs it; there is no module-level state.
"""

from dataclasses import dataclass
from pathlib import Path

from meal_calendar import config
from meal_calendar.core.meal_plan import MealPlanStore
from meal_calendar.core.persistence import MemoryGateway, PersistenceGateway, SqliteGateway
from meal_calendar.core.shopping_list import ShoppingListStore
from meal_calendar.core.suggestions import SuggestionIndex


@dataclass
class Planner:
    gateway: PersistenceGateway
    meal_plan: MealPlanStore
    suggestions: SuggestionIndex
    shopping: ShoppingListStore

    @classmethod
    def open(cls, gateway: PersistenceGateway) -> "Planner":
        """Load every store from gateway, each falling back to empty on bad data."""
        suggestions = SuggestionIndex.load(gateway)
        return cls(
            gateway=gateway,
            meal_plan=MealPlanStore.load(gateway, suggestions),
            suggestions=suggestions,
            shopping=ShoppingListStore.load(gateway),
        )


def default_gateway(db_path: Path = None) -> PersistenceGateway:
    """Gateway selected by MEAL_CALENDAR_PERSISTENCE ("memory" or "sqlite")."""
    if config.persistence_backend() == "memory":
        return MemoryGateway()
    return SqliteGateway(db_path)

"""Dataclass models and fixed vocabularies shared by the core stores.

These are plain data containers with no business logic.  Plan entries
themselves are plain ``dict[str, str]`` keyed by category so they serialize
to JSON unchanged.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

MEAL_SLOTS = ["breakfast", "lunch", "dinner"]
CATEGORIES = ["staple", "main", "side", "other"]

SLOT_LABELS = {"breakfast": "朝食", "lunch": "昼食", "dinner": "夕食"}
SLOT_BADGES = {"breakfast": "朝", "lunch": "昼", "dinner": "夕"}
CATEGORY_LABELS = {"staple": "主食", "main": "主菜", "side": "副菜", "other": "その他"}


@dataclass(frozen=True)
class Cell:
    """One cell of the month grid.  day is None for filler cells."""
    day: Optional[int]
    is_today: bool = False


@dataclass
class ShoppingItem:
    """A checklist entry on the shopping list.

    id is opaque and never reused for the lifetime of the list.
    """
    id: str
    text: str
    done: bool = False


@dataclass
class DaySummary:
    """One row of the week view: a date plus the summary text of each slot.

    summaries maps every slot in MEAL_SLOTS to its summary ("" when empty).
    """
    date: date
    key: str
    label: str
    summaries: dict = field(default_factory=dict)  # dict[slot, str]

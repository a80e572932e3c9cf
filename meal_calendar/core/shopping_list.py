"""Shopping list — a newest-first checklist of free-text items.

Items are added at the top, ticked off with toggle(), and removed in bulk
with clear_done().  Every mutation is written through to the gateway.
"""

import logging
import secrets
import string
import time
from dataclasses import asdict
from typing import Optional

from meal_calendar.core.persistence import SHOPPING_SLOT, PersistenceGateway
from meal_calendar.db.models import ShoppingItem

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def new_item_id() -> str:
    """'<epoch-ms>-<6 random base36 chars>'."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(6))
    return f"{int(time.time() * 1000)}-{suffix}"


class ShoppingListStore:
    """Newest-first checklist.

    _issued_ids remembers every id handed out or loaded this session, including
    ids of cleared items, so an id is never issued twice.
    """

    def __init__(self, gateway: Optional[PersistenceGateway] = None, items: list[ShoppingItem] = None):
        self.gateway = gateway
        self._items: list[ShoppingItem] = list(items or [])
        self._issued_ids = {item.id for item in self._items}

    @classmethod
    def load(cls, gateway: PersistenceGateway) -> "ShoppingListStore":
        return cls(gateway, _clean_items(gateway.load(SHOPPING_SLOT)))

    def items(self) -> list[ShoppingItem]:
        return [ShoppingItem(item.id, item.text, item.done) for item in self._items]

    def get(self, item_id: str) -> Optional[ShoppingItem]:
        for item in self._items:
            if item.id == item_id:
                return ShoppingItem(item.id, item.text, item.done)
        return None

    def _next_id(self) -> str:
        item_id = new_item_id()
        while item_id in self._issued_ids:
            item_id = new_item_id()
        self._issued_ids.add(item_id)
        return item_id

    def add_item(self, text: str) -> Optional[ShoppingItem]:
        """Prepend a new unchecked item.  Blank text is ignored (returns None)."""
        text = (text or "").strip()
        if not text:
            return None
        item = ShoppingItem(id=self._next_id(), text=text)
        self._items.insert(0, item)
        logger.debug("Added shopping item %s", item.id)
        self._persist()
        return ShoppingItem(item.id, item.text, item.done)

    def toggle(self, item_id: str) -> bool:
        """Flip done on the matching item.  Returns False if no item matched."""
        for item in self._items:
            if item.id == item_id:
                item.done = not item.done
                self._persist()
                return True
        return False

    def clear_done(self) -> int:
        """Remove every checked item, keeping the rest in order.  Returns the count removed."""
        remaining = [item for item in self._items if not item.done]
        removed = len(self._items) - len(remaining)
        self._items = remaining
        if removed:
            logger.debug("Cleared %d done shopping items", removed)
        self._persist()
        return removed

    def snapshot(self) -> list[dict]:
        return [asdict(item) for item in self._items]

    def _persist(self) -> None:
        if self.gateway is not None:
            self.gateway.save(SHOPPING_SLOT, self.snapshot())


def format_shopping_list(items: list[ShoppingItem]) -> str:
    """Format the list as a plain-text checklist for export/clipboard."""
    if not items:
        return "No items."
    return "\n".join(f"[{'x' if item.done else ' '}] {item.text}" for item in items)


def _clean_items(data) -> list[ShoppingItem]:
    if data is None:
        return []
    if not isinstance(data, list):
        logger.warning("Shopping list data is not a list; starting empty")
        return []
    items = []
    seen = set()
    for raw in data:
        try:
            item_id, text, done = raw["id"], raw["text"], raw.get("done", False)
        except (KeyError, TypeError, AttributeError):
            logger.warning("Dropping malformed shopping item %r", raw)
            continue
        if not isinstance(item_id, str) or not item_id or item_id in seen:
            continue
        if not isinstance(text, str) or not text.strip() or not isinstance(done, bool):
            continue
        seen.add(item_id)
        items.append(ShoppingItem(id=item_id, text=text.strip(), done=done))
    return items

"""Shopping list operations."""

from __future__ import annotations

import logging

from ..errors import ValidationError
from ..helpers import coerce_category, generate_id, now_iso
from ..models import Recipe, ShoppingItem
from .store import SHOPPING_LIST, CollectionStore

logger = logging.getLogger(__name__)


def new_shopping_item(
    name: str,
    quantity: str = "1",
    unit: str = "шт",
    category: str = "other",
    from_recipe: str | None = None,
) -> ShoppingItem:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Введите название товара")
    return ShoppingItem(
        id=generate_id(),
        name=name,
        quantity=str(quantity or "1"),
        unit=unit or "шт",
        category=coerce_category(category),
        checked=False,
        added_at=now_iso(),
        from_recipe=from_recipe,
    )


def items_from_recipe(recipe: Recipe) -> list[ShoppingItem]:
    """Shopping items for the ingredients of ``recipe`` that are not at home."""
    return [
        new_shopping_item(
            ing.name,
            quantity=ing.amount,
            unit=ing.unit,
            from_recipe=recipe.title,
        )
        for ing in recipe.missing_ingredients()
        if ing.name.strip()
    ]


class ShoppingListRepository:
    """Manages the shopping_list collection.

    Entries are identified by id only; the same product may be listed twice.
    """

    def __init__(self, store: CollectionStore) -> None:
        self._store = store

    def list(self) -> list[ShoppingItem]:
        return [ShoppingItem.from_dict(d) for d in self._store.get(SHOPPING_LIST, [])]

    def _save(self, items: list[ShoppingItem]) -> list[ShoppingItem]:
        self._store.set(SHOPPING_LIST, [i.to_dict() for i in items])
        return items

    def add(self, item: ShoppingItem) -> list[ShoppingItem]:
        if not item.name.strip():
            raise ValidationError("Введите название товара")
        items = self.list()
        items.append(item)
        return self._save(items)

    def add_many(self, new_items: list[ShoppingItem]) -> list[ShoppingItem]:
        return self._save(self.list() + list(new_items))

    def add_missing_from_recipe(self, recipe: Recipe) -> list[ShoppingItem]:
        return self.add_many(items_from_recipe(recipe))

    def toggle(self, item_id: str) -> list[ShoppingItem]:
        items = self.list()
        for item in items:
            if item.id == item_id:
                item.checked = not item.checked
                return self._save(items)
        logger.debug("toggle: no shopping item with id %s", item_id)
        return items

    def delete(self, item_id: str) -> list[ShoppingItem]:
        items = self.list()
        remaining = [i for i in items if i.id != item_id]
        if len(remaining) == len(items):
            logger.debug("delete: no shopping item with id %s", item_id)
            return items
        return self._save(remaining)

    def clear_checked(self) -> list[ShoppingItem]:
        return self._save([i for i in self.list() if not i.checked])

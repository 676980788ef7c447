"""SQLite-backed persistence for inventory, recipes, shopping list and stats."""

from .inventory import InventoryRepository, new_product
from .onboarding import OnboardingRepository
from .recipes import RecipeBook
from .schema import ensure_schema
from .shopping import ShoppingListRepository, items_from_recipe, new_shopping_item
from .stats import StatsRepository
from .store import CollectionStore


def clear_all_data(store: CollectionStore) -> None:
    """Empty every collection; stats fall back to the zero baseline."""
    store.clear()


__all__ = [
    "CollectionStore",
    "InventoryRepository",
    "OnboardingRepository",
    "RecipeBook",
    "ShoppingListRepository",
    "StatsRepository",
    "clear_all_data",
    "ensure_schema",
    "items_from_recipe",
    "new_product",
    "new_shopping_item",
]

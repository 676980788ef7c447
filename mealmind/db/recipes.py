"""Saved recipes and recipe history."""

from __future__ import annotations

from dataclasses import replace

from ..helpers import now_iso
from ..models import Recipe
from .store import RECIPE_HISTORY, SAVED_RECIPES, CollectionStore

HISTORY_LIMIT = 50


class RecipeBook:
    """Manages the saved_recipes and recipe_history collections.

    Both are ordered most recent first.
    """

    def __init__(self, store: CollectionStore, history_limit: int = HISTORY_LIMIT) -> None:
        self._store = store
        self._history_limit = history_limit

    def saved(self) -> list[Recipe]:
        return [Recipe.from_dict(d) for d in self._store.get(SAVED_RECIPES, [])]

    def history(self) -> list[Recipe]:
        return [Recipe.from_dict(d) for d in self._store.get(RECIPE_HISTORY, [])]

    def is_saved(self, recipe_id: str) -> bool:
        return any(r.id == recipe_id for r in self.saved())

    def save(self, recipe: Recipe) -> list[Recipe]:
        """Add ``recipe`` to the saved list; saving it again changes nothing."""
        recipes = self.saved()
        if any(r.id == recipe.id for r in recipes):
            return recipes
        recipes.insert(0, replace(recipe, saved_at=now_iso()))
        self._store.set(SAVED_RECIPES, [r.to_dict() for r in recipes])
        return recipes

    def remove_saved(self, recipe_id: str) -> list[Recipe]:
        recipes = [r for r in self.saved() if r.id != recipe_id]
        self._store.set(SAVED_RECIPES, [r.to_dict() for r in recipes])
        return recipes

    def add_to_history(self, recipe: Recipe) -> list[Recipe]:
        """Move ``recipe`` to the front of the history and cap its length."""
        history = [r for r in self.history() if r.id != recipe.id]
        history.insert(0, recipe)
        history = history[: self._history_limit]
        self._store.set(RECIPE_HISTORY, [r.to_dict() for r in history])
        return history

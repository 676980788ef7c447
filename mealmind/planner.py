"""Weekly meal planning from the current fridge inventory."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from .generation.recipes import (
    DEFAULT_SERVINGS,
    RecipeConstraints,
    build_recipe_request,
    request_recipe,
)
from .models import Product, Recipe, RecipeIngredient

if TYPE_CHECKING:
    from .assistant import ResultGuard
    from .generation import GenerationBackend

logger = logging.getLogger(__name__)

# (meal type, label, max cook time in minutes)
MEAL_SLOTS: list[tuple[str, str, int]] = [
    ("breakfast", "Завтрак", 20),
    ("lunch", "Обед", 45),
    ("dinner", "Ужин", 30),
]

DAY_NAMES = [
    "Понедельник",
    "Вторник",
    "Среда",
    "Четверг",
    "Пятница",
    "Суббота",
    "Воскресенье",
]


@dataclass
class MealSlot:
    meal_type: str  # "breakfast" | "lunch" | "dinner"
    label: str
    max_time: int
    recipe: Recipe | None = None


@dataclass
class DayPlan:
    name: str
    meals: list[MealSlot] = field(default_factory=list)

    def slot(self, meal_type: str) -> MealSlot:
        for meal in self.meals:
            if meal.meal_type == meal_type:
                return meal
        raise KeyError(meal_type)


@dataclass
class WeekPlan:
    days: list[DayPlan] = field(default_factory=list)

    @classmethod
    def empty(cls) -> WeekPlan:
        return cls(
            days=[
                DayPlan(
                    name=name,
                    meals=[MealSlot(t, label, max_time) for t, label, max_time in MEAL_SLOTS],
                )
                for name in DAY_NAMES
            ]
        )

    def recipes(self) -> list[Recipe]:
        return [m.recipe for d in self.days for m in d.meals if m.recipe is not None]

    def is_complete(self) -> bool:
        return all(m.recipe is not None for d in self.days for m in d.meals)

    def ingredients(self) -> list[RecipeIngredient]:
        return [ing for r in self.recipes() for ing in r.ingredients]

    def coverage(self) -> tuple[int, int]:
        """(ingredients already at home, all ingredients) across the plan."""
        ingredients = self.ingredients()
        return sum(1 for i in ingredients if i.available), len(ingredients)

    def missing_ingredients(self) -> list[RecipeIngredient]:
        return [i for i in self.ingredients() if not i.available]

    def display(self) -> str:
        """Format the plan for terminal display."""
        available, total = self.coverage()
        lines: list[str] = []
        for day in self.days:
            lines.append(f"{'─' * 50}")
            lines.append(f"📅 {day.name}")
            for meal in day.meals:
                title = meal.recipe.title if meal.recipe else "—"
                lines.append(f"  {meal.label:<8} {title}")
        lines.append(f"{'─' * 50}")
        lines.append(f"🥬 {available} из {total} ингредиентов в наличии")
        return "\n".join(lines)


ProgressCallback = Callable[[DayPlan, MealSlot], None]


class WeekPlanner:
    """Fill a WeekPlan one meal slot at a time.

    Requests are issued strictly one after another so the generation
    service is not flooded and the caller can render each finished slot.
    """

    def __init__(
        self,
        backend: GenerationBackend,
        servings: int = DEFAULT_SERVINGS,
        today: date | None = None,
    ) -> None:
        self._backend = backend
        self._servings = servings
        self._today = today

    async def _generate(self, slot: MealSlot, products: list[Product]) -> Recipe:
        request = build_recipe_request(
            products,
            RecipeConstraints(servings=self._servings, max_time=slot.max_time),
            today=self._today,
        )
        return await request_recipe(self._backend, request)

    async def generate_slot(
        self,
        plan: WeekPlan,
        day_index: int,
        meal_type: str,
        products: list[Product],
    ) -> Recipe:
        """(Re)generate a single slot, replacing any recipe already there."""
        slot = plan.days[day_index].slot(meal_type)
        recipe = await self._generate(slot, products)
        slot.recipe = recipe
        return recipe

    async def fill(
        self,
        plan: WeekPlan,
        products: list[Product],
        on_progress: ProgressCallback | None = None,
        guard: ResultGuard | None = None,
    ) -> WeekPlan:
        """Generate a recipe for every empty slot of ``plan``.

        ``on_progress`` runs after each finished slot. When ``guard`` is
        invalidated while a request is in flight, that result is dropped and
        no further requests are made. An error stops the loop and
        propagates; slots filled so far stay in ``plan``.
        """
        token = guard.begin() if guard is not None else None

        for day in plan.days:
            for slot in day.meals:
                if slot.recipe is not None:
                    continue
                recipe = await self._generate(slot, products)
                if guard is not None and not guard.is_current(token):
                    logger.info("Meal plan request went stale; discarding result")
                    return plan
                slot.recipe = recipe
                if on_progress is not None:
                    on_progress(day, slot)
        return plan

"""Tests for the weekly meal planner (mocked generation backend)."""

import json
from datetime import date
from unittest.mock import AsyncMock

import pytest

from mealmind.assistant import ResultGuard
from mealmind.errors import TransportError
from mealmind.models import Product, Recipe, RecipeIngredient
from mealmind.planner import DAY_NAMES, MEAL_SLOTS, MealSlot, WeekPlan, WeekPlanner

TODAY = date(2025, 3, 10)


def _reply(title: str, available: bool = True) -> str:
    return json.dumps(
        {
            "title": title,
            "cookTime": 20,
            "ingredients": [
                {"name": "Яйца", "amount": "2", "unit": "шт", "available": True},
                {"name": "Сыр", "amount": "50", "unit": "г", "available": available},
            ],
        },
        ensure_ascii=False,
    )


@pytest.fixture
def products():
    return [
        Product(
            id="p1",
            name="Яйца",
            quantity="10",
            unit="шт",
            category="dairy",
            expiry_date="2025-03-12",
            added_at="",
        )
    ]


@pytest.fixture
def backend():
    mock = AsyncMock()
    counter = iter(range(100))
    mock.generate.side_effect = lambda *a, **kw: _reply(f"Блюдо {next(counter)}")
    return mock


class TestWeekPlan:
    def test_empty_plan_shape(self):
        plan = WeekPlan.empty()
        assert [d.name for d in plan.days] == DAY_NAMES
        assert all(len(d.meals) == len(MEAL_SLOTS) for d in plan.days)
        assert plan.recipes() == []
        assert not plan.is_complete()
        assert plan.coverage() == (0, 0)

    def test_slot_lookup(self):
        day = WeekPlan.empty().days[0]
        assert day.slot("lunch").label == "Обед"
        with pytest.raises(KeyError):
            day.slot("brunch")

    def test_coverage_and_missing(self):
        plan = WeekPlan.empty()
        plan.days[0].slot("breakfast").recipe = Recipe(
            id="r",
            title="Омлет",
            ingredients=[
                RecipeIngredient(name="Яйца", available=True),
                RecipeIngredient(name="Молоко", available=False),
            ],
        )
        assert plan.coverage() == (1, 2)
        assert [i.name for i in plan.missing_ingredients()] == ["Молоко"]
        assert "Омлет" in plan.display()
        assert "1 из 2" in plan.display()


class TestWeekPlanner:
    @pytest.mark.asyncio
    async def test_fill_all_slots_in_order(self, backend, products):
        progress: list[tuple[str, str]] = []
        planner = WeekPlanner(backend, servings=2, today=TODAY)

        plan = await planner.fill(
            WeekPlan.empty(),
            products,
            on_progress=lambda day, slot: progress.append((day.name, slot.meal_type)),
        )

        assert plan.is_complete()
        assert backend.generate.await_count == 21
        assert progress[0] == ("Понедельник", "breakfast")
        assert progress[-1] == ("Воскресенье", "dinner")
        assert plan.days[0].meals[0].recipe.title == "Блюдо 0"
        assert plan.days[6].meals[2].recipe.title == "Блюдо 20"

    @pytest.mark.asyncio
    async def test_slot_time_limits_in_prompt(self, backend, products):
        planner = WeekPlanner(backend, today=TODAY)
        plan = WeekPlan.empty()
        await planner.generate_slot(plan, 0, "lunch", products)

        prompt = backend.generate.call_args.args[0]
        assert "Максимальное время: 45 минут" in prompt
        assert plan.days[0].slot("lunch").recipe is not None

    @pytest.mark.asyncio
    async def test_fill_skips_filled_slots(self, backend, products):
        plan = WeekPlan.empty()
        existing = Recipe(id="keep", title="Оставить")
        plan.days[0].meals[0].recipe = existing

        await WeekPlanner(backend, today=TODAY).fill(plan, products)

        assert backend.generate.await_count == 20
        assert plan.days[0].meals[0].recipe is existing

    @pytest.mark.asyncio
    async def test_error_keeps_partial_plan(self, products):
        backend = AsyncMock()
        backend.generate.side_effect = [_reply("Первое"), TransportError("Сервис временно недоступен")]
        plan = WeekPlan.empty()

        with pytest.raises(TransportError):
            await WeekPlanner(backend, today=TODAY).fill(plan, products)

        assert [r.title for r in plan.recipes()] == ["Первое"]

    @pytest.mark.asyncio
    async def test_stale_guard_discards_result(self, products):
        guard = ResultGuard()
        backend = AsyncMock()

        async def generate(*args, **kwargs):
            guard.invalidate()
            return _reply("Поздно")

        backend.generate.side_effect = generate
        plan = WeekPlan.empty()

        await WeekPlanner(backend, today=TODAY).fill(plan, products, guard=guard)

        assert backend.generate.await_count == 1
        assert plan.recipes() == []


def test_meal_slot_defaults():
    slot = MealSlot("dinner", "Ужин", 30)
    assert slot.recipe is None

"""High-level workflows tying generation results to persisted state."""

from __future__ import annotations

import logging
from datetime import date

from .config import MealMindConfig
from .db import (
    CollectionStore,
    InventoryRepository,
    OnboardingRepository,
    RecipeBook,
    ShoppingListRepository,
    StatsRepository,
    clear_all_data,
    items_from_recipe,
)
from .generation import GenerationBackend, create_backend
from .generation.chat import build_chat_prompt, parse_chat_reply
from .generation.guest_menu import (
    GuestMenuConstraints,
    build_guest_menu_request,
    parse_guest_menu_response,
)
from .generation.products import SCAN_PROMPT, parse_products_response
from .generation.recipes import (
    AUTO_PRIORITY_LIMIT,
    RecipeConstraints,
    build_recipe_request,
    request_recipe,
    select_priority,
)
from .helpers import generate_id, now_iso
from .models import ChatMessage, GuestMenu, Product, Recipe, ShoppingItem
from .planner import ProgressCallback, WeekPlan, WeekPlanner
from .ranking import recipe_savings, sort_by_urgency

logger = logging.getLogger(__name__)

_RECENT_RECIPES_IN_CHAT = 5


class ResultGuard:
    """Lets a caller drop async results it is no longer interested in.

    ``begin()`` hands out a token before a request; ``invalidate()`` (e.g.
    when the screen that asked goes away) makes every outstanding token
    stale, and ``is_current(token)`` tells whether a result may be applied.
    """

    def __init__(self) -> None:
        self._generation = 0

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def invalidate(self) -> None:
        self._generation += 1

    def is_current(self, token: int | None) -> bool:
        return token == self._generation


class MealMindAssistant:
    """Scan, recommend, plan and chat on top of the local collections."""

    def __init__(
        self,
        config: MealMindConfig,
        store: CollectionStore | None = None,
        backend: GenerationBackend | None = None,
        today: date | None = None,
    ) -> None:
        self._config = config
        self._store = store or CollectionStore(config.storage.path)
        self._backend = backend
        self._today = today
        self.inventory = InventoryRepository(self._store)
        self.recipes = RecipeBook(
            self._store, history_limit=config.recommendation.history_limit
        )
        self.shopping = ShoppingListRepository(self._store)
        self.stats = StatsRepository(self._store)
        self.onboarding = OnboardingRepository(self._store)
        self.conversation: list[ChatMessage] = []

    @property
    def backend(self) -> GenerationBackend:
        if self._backend is None:
            self._backend = create_backend(self._config)
        return self._backend

    def close(self) -> None:
        self._store.close()

    # ── Inventory ────────────────────────────────────────────────────

    async def recognize(self, image_paths: list[str]) -> list[Product]:
        """Identify products on fridge photos without storing them."""
        text = await self.backend.generate(
            SCAN_PROMPT,
            image_paths=image_paths,
            temperature=0.2,
            max_tokens=2048,
        )
        return parse_products_response(text, self._today)

    def add_scanned(self, products: list[Product]) -> list[Product]:
        """Store the products the user confirmed from a scan."""
        inventory = self.inventory.add_many(products)
        if products:
            self.stats.increment("products_scanned", len(products))
        return inventory

    async def scan(
        self, image_paths: list[str], min_confidence: float = 0.0
    ) -> list[Product]:
        """Recognize products and store those at or above ``min_confidence``."""
        products = [
            p for p in await self.recognize(image_paths)
            if p.confidence is None or p.confidence >= min_confidence
        ]
        self.add_scanned(products)
        return products

    # ── Recipes ──────────────────────────────────────────────────────

    async def generate_recipe(
        self,
        selected_ids: list[str] | None = None,
        constraints: RecipeConstraints | None = None,
        guard: ResultGuard | None = None,
    ) -> Recipe | None:
        """Generate a recipe from the inventory and record it.

        With ``selected_ids`` exactly those products are offered and all of
        them are prioritized; otherwise the whole inventory is offered, most
        urgent first, and up to five non-fresh items are prioritized. Money
        saved is credited for the critical items among the prioritized ones.

        When ``guard`` is invalidated while the request is in flight, the
        recipe is dropped: nothing is recorded and ``None`` is returned.

        Raises:
            NotFoundError: A selected id is not in the inventory.
        """
        rec = self._config.recommendation
        constraints = constraints or RecipeConstraints(servings=rec.default_servings)

        if selected_ids:
            candidates = [self.inventory.get(pid) for pid in selected_ids]
            prioritized = candidates
        else:
            candidates = sort_by_urgency(self.inventory.list(), self._today)
            prioritized = select_priority(
                candidates, self._today, limit=AUTO_PRIORITY_LIMIT
            )

        request = build_recipe_request(
            candidates, constraints, prioritized=prioritized, today=self._today
        )
        token = guard.begin() if guard is not None else None
        recipe = await request_recipe(self.backend, request)
        if guard is not None and not guard.is_current(token):
            logger.info("Recipe request went stale; discarding %r", recipe.title)
            return None

        self.recipes.add_to_history(recipe)
        self.stats.increment("recipes_generated")
        self.stats.increment("time_saved", recipe.cook_time)
        savings = recipe_savings(
            prioritized,
            per_item=rec.savings_per_item,
            weigh_by_quantity=rec.weigh_by_quantity,
            today=self._today,
        )
        if savings > 0:
            self.stats.increment("money_saved", savings)
        logger.info("Generated recipe %r from %d products", recipe.title, len(candidates))
        return recipe

    def add_missing_to_shopping(self, recipe: Recipe) -> list[ShoppingItem]:
        """Put the recipe's unavailable ingredients on the shopping list.

        Returns only the newly added entries.
        """
        items = items_from_recipe(recipe)
        if items:
            self.shopping.add_many(items)
        return items

    # ── Meal plans ───────────────────────────────────────────────────

    async def plan_week(
        self,
        plan: WeekPlan | None = None,
        on_progress: ProgressCallback | None = None,
        guard: ResultGuard | None = None,
    ) -> WeekPlan:
        """Fill the empty slots of ``plan``; every new recipe goes to history."""
        plan = plan or WeekPlan.empty()
        planner = WeekPlanner(
            self.backend,
            servings=self._config.recommendation.default_servings,
            today=self._today,
        )

        def _record(day, slot) -> None:
            self.recipes.add_to_history(slot.recipe)
            if on_progress is not None:
                on_progress(day, slot)

        products = sort_by_urgency(self.inventory.list(), self._today)
        return await planner.fill(plan, products, on_progress=_record, guard=guard)

    def add_plan_missing_to_shopping(self, plan: WeekPlan) -> list[ShoppingItem]:
        items: list[ShoppingItem] = []
        for recipe in plan.recipes():
            items.extend(items_from_recipe(recipe))
        if items:
            self.shopping.add_many(items)
        return items

    async def generate_guest_menu(
        self,
        guest_count: int,
        budget: str = "standard",
        city: str | None = None,
        guard: ResultGuard | None = None,
    ) -> GuestMenu | None:
        """Generate a party menu; nothing is stored until the user imports it.

        Returns ``None`` when ``guard`` was invalidated during the request.
        """
        constraints = GuestMenuConstraints(
            guest_count=guest_count,
            budget=budget,
            city=city or self._config.profile.city,
        )
        token = guard.begin() if guard is not None else None
        text = await self.backend.generate(
            build_guest_menu_request(constraints), max_tokens=8192
        )
        if guard is not None and not guard.is_current(token):
            logger.info("Guest menu request went stale; discarding result")
            return None
        return parse_guest_menu_response(text, constraints)

    def import_guest_shopping(self, menu: GuestMenu) -> list[ShoppingItem]:
        return self.shopping.add_many(menu.shopping_list)

    # ── Chat ─────────────────────────────────────────────────────────

    async def chat(self, message: str) -> str:
        """Ask the assistant; the turn is kept only if a reply arrives."""
        recent = [r.title for r in self.recipes.history()[:_RECENT_RECIPES_IN_CHAT]]
        prompt = build_chat_prompt(
            message,
            history=self.conversation,
            products=self.inventory.list(),
            recent_recipes=recent,
        )
        text = await self.backend.generate(prompt, max_tokens=1024)
        reply = parse_chat_reply(text)

        self.conversation.append(
            ChatMessage(id=generate_id(), role="user", content=message, timestamp=now_iso())
        )
        self.conversation.append(
            ChatMessage(id=generate_id(), role="assistant", content=reply, timestamp=now_iso())
        )
        return reply

    # ── Data ─────────────────────────────────────────────────────────

    def clear_all_data(self) -> None:
        clear_all_data(self._store)
        self.conversation.clear()

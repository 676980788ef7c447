"""Recipe request construction and response parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from ..expiry import classify
from ..helpers import generate_id, now_iso
from ..models import DIFFICULTIES, Product, Recipe, RecipeIngredient
from .jsonscan import extract_json_object

if TYPE_CHECKING:
    from . import GenerationBackend

DEFAULT_SERVINGS = 4
DEFAULT_COOK_TIME = 30
AUTO_PRIORITY_LIMIT = 5

_RECIPE_JSON_SHAPE = """\
Верни ТОЛЬКО JSON в формате:
{
  "title": "Название блюда",
  "description": "Краткое описание блюда (1-2 предложения)",
  "cookTime": число_минут,
  "servings": количество_порций,
  "difficulty": "easy" | "medium" | "hard",
  "ingredients": [
    { "name": "название", "amount": "количество", "unit": "единица", "available": true/false }
  ],
  "instructions": ["Шаг 1...", "Шаг 2...", ...],
  "usesExpiringProducts": ["название1", "название2"]
}

Инструкции должны быть подробными и понятными."""


@dataclass
class RecipeConstraints:
    servings: int = DEFAULT_SERVINGS
    max_time: int | None = None  # minutes
    difficulty: str | None = None


@dataclass
class RecipeRequest:
    """Everything needed to ask the generator for one recipe."""

    prompt: str
    prioritized_names: list[str] = field(default_factory=list)
    candidate_names: list[str] = field(default_factory=list)
    servings: int = DEFAULT_SERVINGS
    temperature: float = 0.7
    max_tokens: int = 4096


def select_priority(
    items: list[Product],
    today: date | None = None,
    limit: int | None = None,
) -> list[Product]:
    """Items in the warning or critical tier, at most ``limit`` of them."""
    result = [p for p in items if classify(p.expiry_date, today) != "fresh"]
    return result if limit is None else result[:limit]


def build_recipe_request(
    candidates: list[Product],
    constraints: RecipeConstraints | None = None,
    prioritized: list[Product] | None = None,
    today: date | None = None,
) -> RecipeRequest:
    """Build the prompt for a recipe that uses ``candidates``.

    ``prioritized`` is an explicit user choice of items to use up first and
    is taken as-is; without it, every non-fresh candidate is prioritized.
    """
    constraints = constraints or RecipeConstraints()
    if prioritized is None:
        prioritized = select_priority(candidates, today)
    priority_names = [p.name for p in prioritized]

    lines = [
        "Ты - профессиональный шеф-повар. "
        "Создай рецепт на русском языке, используя эти продукты:",
        "",
    ]
    if candidates:
        lines.extend(f"- {p.name} ({p.quantity} {p.unit})" for p in candidates)
    else:
        lines.append("- любые доступные продукты")
    lines.append("")

    if priority_names:
        lines.append(
            "ВАЖНО: Приоритетно используй продукты, которые скоро испортятся: "
            + ", ".join(priority_names)
        )
        lines.append("")

    lines.append(f"Порций: {constraints.servings}")
    if constraints.max_time:
        lines.append(f"Максимальное время: {constraints.max_time} минут")
    if constraints.difficulty:
        lines.append(f"Сложность: {constraints.difficulty}")
    lines.append("")
    lines.append(_RECIPE_JSON_SHAPE)

    return RecipeRequest(
        prompt="\n".join(lines),
        prioritized_names=priority_names,
        candidate_names=[p.name for p in candidates],
        servings=constraints.servings,
    )


def _positive_int(value: object, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(float(value))
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _optional_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _str_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None and str(v).strip()]


def _ingredients(value: object) -> list[RecipeIngredient]:
    if not isinstance(value, list):
        return []
    result: list[RecipeIngredient] = []
    for item in value:
        if isinstance(item, dict) and item.get("name"):
            result.append(RecipeIngredient.from_dict(item))
        elif isinstance(item, str) and item.strip():
            result.append(RecipeIngredient(name=item.strip()))
    return result


def recipe_from_payload(
    data: dict,
    *,
    servings: int,
    uses_expiring: list[str],
    default_title: str = "Новый рецепт",
) -> Recipe:
    """Build a Recipe from one decoded JSON object, filling safe defaults."""
    difficulty = data.get("difficulty")
    if difficulty not in DIFFICULTIES:
        difficulty = "medium"

    return Recipe(
        id=generate_id(),
        title=str(data.get("title") or default_title),
        description=str(data.get("description") or ""),
        cook_time=_positive_int(data.get("cookTime"), DEFAULT_COOK_TIME),
        servings=_positive_int(data.get("servings"), servings),
        difficulty=difficulty,
        ingredients=_ingredients(data.get("ingredients")),
        instructions=_str_list(data.get("instructions")),
        uses_expiring_products=uses_expiring,
        generated_at=now_iso(),
        estimated_cost=_optional_float(data.get("estimatedCost")),
    )


def parse_recipe_response(
    text: str,
    fallback_expiring_names: list[str],
    *,
    servings: int | None = None,
    known_names: list[str] | None = None,
) -> Recipe:
    """Parse the generator's reply into a Recipe.

    Only a reply without a parseable JSON object is an error; missing or
    null fields fall back to defaults. When the reply does not list the
    expiring products it used, ``fallback_expiring_names`` is assumed.
    ``known_names`` limits that list to products that were offered.

    Raises:
        GenerationParseError: No JSON object could be extracted.
    """
    data = extract_json_object(text, "Не удалось сгенерировать рецепт")

    uses = data.get("usesExpiringProducts")
    if isinstance(uses, list):
        uses_expiring = _str_list(uses)
        if known_names is not None:
            known = {n.strip().lower() for n in known_names}
            uses_expiring = [n for n in uses_expiring if n.strip().lower() in known]
    else:
        uses_expiring = list(fallback_expiring_names)

    return recipe_from_payload(
        data,
        servings=servings or DEFAULT_SERVINGS,
        uses_expiring=uses_expiring,
    )


async def request_recipe(backend: GenerationBackend, request: RecipeRequest) -> Recipe:
    """Send ``request`` to the generator and parse the reply."""
    text = await backend.generate(
        request.prompt,
        temperature=request.temperature,
        max_tokens=request.max_tokens,
    )
    return parse_recipe_response(
        text,
        request.prioritized_names,
        servings=request.servings,
        known_names=request.candidate_names,
    )

"""Guest menu request construction and response parsing."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ValidationError
from ..helpers import coerce_category, generate_id, now_iso
from ..models import Beverage, GuestMenu, Recipe, ShoppingItem
from .jsonscan import extract_json_object
from .recipes import recipe_from_payload

# Budget tier → (min, max) cost per guest, in som
BUDGET_BANDS: dict[str, tuple[int, int]] = {
    "economy": (650, 1100),
    "standard": (1100, 1800),
    "premium": (1800, 3000),
}

MIN_GUESTS = 1
MAX_GUESTS = 20


@dataclass
class GuestMenuConstraints:
    guest_count: int
    budget: str = "standard"
    city: str = "Бишкек"

    def __post_init__(self) -> None:
        if not MIN_GUESTS <= self.guest_count <= MAX_GUESTS:
            raise ValidationError(
                f"Количество гостей должно быть от {MIN_GUESTS} до {MAX_GUESTS}"
            )
        if self.budget not in BUDGET_BANDS:
            raise ValidationError(
                f"Неизвестный бюджет: {self.budget!r} "
                f"(economy / standard / premium)"
            )

    @property
    def target_per_person(self) -> float:
        low, high = BUDGET_BANDS[self.budget]
        return (low + high) / 2

    @property
    def target_total(self) -> float:
        return self.target_per_person * self.guest_count


def build_guest_menu_request(constraints: GuestMenuConstraints) -> str:
    """Prompt for a full party menu within the budget band."""
    low, high = BUDGET_BANDS[constraints.budget]
    n = constraints.guest_count
    return f"""\
Ты - профессиональный шеф-повар в Кыргызстане. Создай праздничное меню для {n} гостей.

Город: {constraints.city}
Бюджет на человека: {low}-{high} сом
Общий бюджет: примерно {constraints.target_total:.0f} сом

Создай полноценное меню с:
- 2-3 закуски (холодные и горячие)
- 2 основных блюда (мясо/рыба + гарнир)
- 1-2 десерта
- Напитки (чай, компот, морс)

Учитывай местные продукты и кыргызскую кухню. Порции рассчитаны на {n} человек.

Верни ТОЛЬКО JSON:
{{
  "appetizers": [
    {{
      "title": "Название закуски",
      "description": "Описание",
      "cookTime": число_минут,
      "servings": {n},
      "difficulty": "easy|medium|hard",
      "ingredients": [{{"name": "продукт", "amount": "количество", "unit": "ед", "available": false}}],
      "instructions": ["Шаг 1", "Шаг 2"],
      "estimatedCost": число_в_сомах
    }}
  ],
  "mains": [...],
  "desserts": [...],
  "beverages": [{{"name": "Чай зеленый", "quantity": "{n} л"}}],
  "shoppingList": [{{"name": "Продукт", "quantity": "1", "unit": "кг", "category": "meat|vegetables|dairy|other"}}],
  "totalCost": число,
  "perPersonCost": число
}}"""


def _course(value: object, guest_count: int) -> list[Recipe]:
    if not isinstance(value, list):
        return []
    return [
        recipe_from_payload(
            item, servings=guest_count, uses_expiring=[], default_title="Блюдо"
        )
        for item in value
        if isinstance(item, dict)
    ]


def _beverages(value: object) -> list[Beverage]:
    if not isinstance(value, list):
        return []
    result: list[Beverage] = []
    for item in value:
        if isinstance(item, dict) and item.get("name"):
            result.append(
                Beverage(name=str(item["name"]), quantity=str(item.get("quantity") or ""))
            )
        elif isinstance(item, str) and item.strip():
            result.append(Beverage(name=item.strip()))
    return result


def _shopping_list(value: object) -> list[ShoppingItem]:
    if not isinstance(value, list):
        return []
    added_at = now_iso()
    return [
        ShoppingItem(
            id=generate_id(),
            name=str(item["name"]),
            quantity=str(item.get("quantity") or "1"),
            unit=str(item.get("unit") or "шт"),
            category=coerce_category(item.get("category")),
            checked=False,
            added_at=added_at,
        )
        for item in value
        if isinstance(item, dict) and item.get("name")
    ]


def _positive_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def parse_guest_menu_response(
    text: str, constraints: GuestMenuConstraints
) -> GuestMenu:
    """Parse the generator's reply into a GuestMenu.

    ``total_cost`` falls back to the target budget; ``per_person_cost`` is
    derived from the total whenever the reply omits it.

    Raises:
        GenerationParseError: No JSON object could be extracted.
    """
    data = extract_json_object(text, "Не удалось сгенерировать меню")
    n = constraints.guest_count

    total_cost = _positive_float(data.get("totalCost"))
    if total_cost is None:
        total_cost = constraints.target_total
    per_person = _positive_float(data.get("perPersonCost"))
    if per_person is None:
        per_person = total_cost / n

    return GuestMenu(
        guest_count=n,
        budget=constraints.budget,
        city=constraints.city,
        appetizers=_course(data.get("appetizers"), n),
        mains=_course(data.get("mains"), n),
        desserts=_course(data.get("desserts"), n),
        beverages=_beverages(data.get("beverages")),
        shopping_list=_shopping_list(data.get("shoppingList")),
        total_cost=total_cost,
        per_person_cost=per_person,
    )

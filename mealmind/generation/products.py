"""Product recognition prompt and response parsing for fridge photos."""

from __future__ import annotations

from datetime import date

from ..helpers import coerce_category, default_expiry, generate_id, now_iso
from ..models import Product
from .jsonscan import extract_json_object

DEFAULT_CONFIDENCE = 0.8

SCAN_PROMPT = """\
Analyze this refrigerator/kitchen image and identify all visible food products.
For each product, provide the following in JSON format:
{
  "products": [
    {
      "name": "Product name in Russian",
      "quantity": "estimated quantity (number)",
      "unit": "unit in Russian (шт, кг, л, г, упак)",
      "category": "one of: dairy, meat, vegetables, fruits, grains, beverages, condiments, frozen, bakery, other",
      "confidence": 0.0-1.0
    }
  ]
}

Be specific about product names in Russian. Examples:
- "Молоко 2.5%" instead of just "Молоко"
- "Куриная грудка" instead of just "Мясо"
- "Помидоры красные" instead of just "Овощи"

Return ONLY valid JSON, no additional text."""


def _confidence(value: object) -> float:
    if value is None or isinstance(value, bool):
        return DEFAULT_CONFIDENCE
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_CONFIDENCE
    if number <= 0:
        return DEFAULT_CONFIDENCE
    return min(number, 1.0)


def parse_products_response(text: str, today: date | None = None) -> list[Product]:
    """Turn the recognition reply into new Product records.

    Each product gets a fresh id and an expiry date derived from its
    category's default shelf life.

    Raises:
        GenerationParseError: No JSON object could be extracted.
    """
    data = extract_json_object(text, "Не удалось распознать продукты")
    items = data.get("products")
    if not isinstance(items, list):
        return []

    added_at = now_iso()
    products: list[Product] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        category = coerce_category(item.get("category"))
        products.append(
            Product(
                id=generate_id(),
                name=str(item.get("name") or "Неизвестный продукт"),
                quantity=str(item.get("quantity") or "1"),
                unit=str(item.get("unit") or "шт"),
                category=category,
                expiry_date=default_expiry(category, today),
                added_at=added_at,
                confidence=_confidence(item.get("confidence")),
            )
        )
    return products

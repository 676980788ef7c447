"""Ordering, selection and grouping of inventory by expiry urgency."""

from __future__ import annotations

from datetime import date

from .expiry import CRITICAL_DAYS, classify, days_remaining
from .helpers import parse_quantity
from .models import CATEGORIES, Product

DEFAULT_SAVINGS_PER_ITEM = 150.0


def sort_by_urgency(
    items: list[Product], today: date | None = None
) -> list[Product]:
    """Most urgent first; items sharing an expiry date keep their input order."""
    return sorted(items, key=lambda p: days_remaining(p.expiry_date, today))


def select_expiring(
    items: list[Product],
    within_days: int = CRITICAL_DAYS,
    today: date | None = None,
) -> list[Product]:
    """Items expiring between today and ``within_days`` from now.

    Already overdue items are left out: the selection is what can still be
    saved, not what is already lost.
    """
    result: list[Product] = []
    for item in items:
        days = days_remaining(item.expiry_date, today)
        if 0 <= days <= within_days:
            result.append(item)
    return result


def estimate_savings(
    items: list[Product],
    per_item: float = DEFAULT_SAVINGS_PER_ITEM,
    within_days: int = CRITICAL_DAYS,
    weigh_by_quantity: bool = False,
    today: date | None = None,
) -> float:
    """Placeholder money-saved score for cooking the expiring items.

    A flat amount per expiring item, not a pricing model. With
    ``weigh_by_quantity`` each item counts by its parsed quantity instead
    of once.
    """
    expiring = select_expiring(items, within_days, today)
    if weigh_by_quantity:
        return per_item * sum(parse_quantity(p.quantity) for p in expiring)
    return per_item * len(expiring)


def recipe_savings(
    prioritized: list[Product],
    per_item: float = DEFAULT_SAVINGS_PER_ITEM,
    weigh_by_quantity: bool = False,
    today: date | None = None,
) -> float:
    """Money-saved score credited for a recipe built around ``prioritized``.

    Only critical items count, overdue ones included: they were about to
    be thrown away. Same flat placeholder amount as :func:`estimate_savings`.
    """
    critical = [p for p in prioritized if classify(p.expiry_date, today) == "critical"]
    if weigh_by_quantity:
        return per_item * sum(parse_quantity(p.quantity) for p in critical)
    return per_item * len(critical)


def group_by_category(items: list[Product]) -> dict[str, list[Product]]:
    """Bucket items by category; empty categories are absent."""
    groups: dict[str, list[Product]] = {}
    for item in items:
        category = item.category if item.category in CATEGORIES else "other"
        groups.setdefault(category, []).append(item)
    return groups


def count_by_status(
    items: list[Product], today: date | None = None
) -> dict[str, int]:
    counts = {"critical": 0, "warning": 0, "fresh": 0}
    for item in items:
        counts[classify(item.expiry_date, today)] += 1
    return counts

"""Identifiers, shelf-life defaults and date/quantity helpers."""

from __future__ import annotations

import re
import uuid
from datetime import date, datetime, timedelta
from urllib.parse import quote

from .models import CATEGORIES

# Category → days until a newly added item is assumed to spoil
DEFAULT_SHELF_LIFE_DAYS: dict[str, int] = {
    "dairy": 7,
    "meat": 5,
    "vegetables": 7,
    "fruits": 7,
    "grains": 180,
    "beverages": 30,
    "condiments": 90,
    "frozen": 90,
    "bakery": 5,
    "other": 14,
}

_FRACTION_PATTERN = re.compile(r"(\d+)\s*/\s*(\d+)")
_NUMBER_PATTERN = re.compile(r"\d+(?:[.,]\d+)?")


def generate_id() -> str:
    """Return a new opaque identifier for a locally stored record."""
    return uuid.uuid4().hex


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


def coerce_category(value: object) -> str:
    """Map an external category label to the fixed enumeration."""
    if isinstance(value, str):
        value = value.strip().lower()
        if value in CATEGORIES:
            return value
    return "other"


def default_shelf_life_days(category: str) -> int:
    return DEFAULT_SHELF_LIFE_DAYS.get(category, DEFAULT_SHELF_LIFE_DAYS["other"])


def add_days(d: date, n: int) -> date:
    """Calendar arithmetic; month and year rollover is handled by timedelta."""
    return d + timedelta(days=n)


def default_expiry(category: str, today: date | None = None) -> str:
    """ISO expiry date for an item of ``category`` added ``today``."""
    start = today or date.today()
    return add_days(start, default_shelf_life_days(category)).isoformat()


def to_date(value: date | datetime | str) -> date:
    """Normalize a date, datetime or ISO string to a calendar date.

    Timezone-aware values are converted to local time first, so an item
    stored as ``2025-03-01T21:00:00Z`` lands on the local calendar day.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value

    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_date(datetime.fromisoformat(text))


def parse_quantity(text: str | float | int | None) -> float:
    """Best-effort numeric value of a free-text quantity.

    Ranges ("2-3") use their first number and fractions ("1/2") are
    evaluated. Anything unparseable counts as 1.
    """
    if isinstance(text, (int, float)):
        return float(text)
    if not text:
        return 1.0

    m = _FRACTION_PATTERN.search(text)
    if m and int(m.group(2)) != 0:
        return int(m.group(1)) / int(m.group(2))

    m = _NUMBER_PATTERN.search(text)
    if m is None:
        return 1.0
    return float(m.group(0).replace(",", "."))


def format_minutes(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes} мин"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours} ч"
    return f"{hours} ч {mins} мин"


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def delivery_links(names: list[str]) -> dict[str, str]:
    """Search URLs for ordering ``names`` from local delivery services."""
    query = quote(", ".join(names))
    return {
        "glovo": f"https://glovoapp.com/kg/ru/bishkek/search/?q={query}",
        "nambafood": f"https://nambafood.kg/search?q={query}",
    }

"""Expiry classification: days remaining, urgency tier and countdown text."""

from __future__ import annotations

from datetime import date, datetime

from .helpers import to_date

CRITICAL_DAYS = 3
WARNING_DAYS = 7


def days_remaining(
    expiry: date | datetime | str, today: date | None = None
) -> int:
    """Whole days from ``today`` until ``expiry``; negative once overdue.

    Both sides are reduced to calendar days before subtracting, so the
    time of day never matters.
    """
    start = today or date.today()
    return (to_date(expiry) - start).days


def classify(expiry: date | datetime | str, today: date | None = None) -> str:
    """Return ``"critical"``, ``"warning"`` or ``"fresh"``.

    Overdue items stay ``"critical"``; there is no separate expired tier.
    """
    days = days_remaining(expiry, today)
    if days <= CRITICAL_DAYS:
        return "critical"
    if days <= WARNING_DAYS:
        return "warning"
    return "fresh"


def describe(expiry: date | datetime | str, today: date | None = None) -> str:
    """Human-readable countdown for a status badge."""
    days = days_remaining(expiry, today)
    if days < 0:
        return f"Просрочено {abs(days)} дн."
    if days == 0:
        return "Истекает сегодня"
    if days == 1:
        return "Истекает завтра"
    if days <= WARNING_DAYS:
        return f"{days} дн. осталось"
    return f"{days} дней"

"""Tests for id, date, quantity and formatting helpers."""

from datetime import date, datetime, timezone

import pytest

from mealmind.helpers import (
    add_days,
    coerce_category,
    default_expiry,
    delivery_links,
    format_minutes,
    generate_id,
    parse_quantity,
    to_date,
    truncate,
)


def test_generate_id_is_unique():
    ids = {generate_id() for _ in range(100)}
    assert len(ids) == 100


class TestCoerceCategory:
    def test_known(self):
        assert coerce_category("dairy") == "dairy"
        assert coerce_category(" Meat ") == "meat"

    def test_unknown_falls_back_to_other(self):
        assert coerce_category("sweets") == "other"
        assert coerce_category(None) == "other"
        assert coerce_category(42) == "other"


class TestDates:
    def test_add_days_rolls_over_month_and_year(self):
        assert add_days(date(2025, 1, 31), 1) == date(2025, 2, 1)
        assert add_days(date(2024, 12, 30), 5) == date(2025, 1, 4)

    def test_default_expiry_by_category(self):
        today = date(2025, 3, 10)
        assert default_expiry("dairy", today) == "2025-03-17"
        assert default_expiry("meat", today) == "2025-03-15"
        assert default_expiry("other", today) == "2025-03-24"

    def test_to_date_variants(self):
        assert to_date("2025-03-10") == date(2025, 3, 10)
        assert to_date("2025-03-10T23:15:00") == date(2025, 3, 10)
        assert to_date(datetime(2025, 3, 10, 8, 0)) == date(2025, 3, 10)
        assert to_date(date(2025, 3, 10)) == date(2025, 3, 10)

    def test_to_date_aware_uses_local_day(self):
        value = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)
        assert to_date(value) == value.astimezone().date()
        assert to_date("2025-03-10T12:00:00Z") == value.astimezone().date()


class TestParseQuantity:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2", 2.0),
            ("0.5", 0.5),
            ("1,5", 1.5),
            ("2-3", 2.0),
            ("1/2", 0.5),
            ("500 г", 500.0),
            ("", 1.0),
            (None, 1.0),
            ("по вкусу", 1.0),
            (3, 3.0),
        ],
    )
    def test_parse(self, text, expected):
        assert parse_quantity(text) == expected


def test_format_minutes():
    assert format_minutes(25) == "25 мин"
    assert format_minutes(60) == "1 ч"
    assert format_minutes(95) == "1 ч 35 мин"


def test_truncate():
    assert truncate("короткий", 20) == "короткий"
    assert truncate("a" * 30, 10) == "aaaaaaa..."


def test_delivery_links_encode_names():
    links = delivery_links(["Молоко", "Хлеб"])
    assert set(links) == {"glovo", "nambafood"}
    assert "%D0%9C" in links["glovo"]  # "М" percent-encoded

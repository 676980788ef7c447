"""Tests for urgency ordering, expiring selection and savings estimates."""

from datetime import date

from mealmind.models import Product
from mealmind.ranking import (
    count_by_status,
    estimate_savings,
    group_by_category,
    recipe_savings,
    select_expiring,
    sort_by_urgency,
)

TODAY = date(2025, 3, 10)


def _product(name: str, expiry: str, category: str = "other", quantity: str = "1") -> Product:
    return Product(
        id=name,
        name=name,
        quantity=quantity,
        unit="шт",
        category=category,
        expiry_date=expiry,
        added_at="2025-03-01T10:00:00",
    )


class TestSortByUrgency:
    def test_most_urgent_first(self):
        items = [
            _product("Сыр", "2025-03-20"),
            _product("Молоко", "2025-03-11"),
            _product("Йогурт", "2025-03-09"),
        ]
        result = sort_by_urgency(items, TODAY)
        assert [p.name for p in result] == ["Йогурт", "Молоко", "Сыр"]

    def test_stable_for_equal_dates(self):
        items = [
            _product("A", "2025-03-12"),
            _product("B", "2025-03-12"),
            _product("C", "2025-03-11"),
            _product("D", "2025-03-12"),
        ]
        result = sort_by_urgency(items, TODAY)
        assert [p.name for p in result] == ["C", "A", "B", "D"]

    def test_does_not_mutate_input(self):
        items = [_product("B", "2025-03-20"), _product("A", "2025-03-11")]
        sort_by_urgency(items, TODAY)
        assert [p.name for p in items] == ["B", "A"]

    def test_empty(self):
        assert sort_by_urgency([], TODAY) == []


class TestSelectExpiring:
    def test_bounds(self):
        items = [
            _product("overdue", "2025-03-09"),
            _product("today", "2025-03-10"),
            _product("three", "2025-03-13"),
            _product("four", "2025-03-14"),
        ]
        result = select_expiring(items, 3, TODAY)
        assert [p.name for p in result] == ["today", "three"]

    def test_custom_window(self):
        items = [_product("week", "2025-03-17"), _product("later", "2025-03-18")]
        assert [p.name for p in select_expiring(items, 7, TODAY)] == ["week"]


class TestEstimateSavings:
    def test_flat_per_item(self):
        items = [
            _product("a", "2025-03-10"),
            _product("b", "2025-03-12"),
            _product("c", "2025-03-30"),
        ]
        assert estimate_savings(items, per_item=150, today=TODAY) == 300

    def test_no_expiring_items(self):
        items = [_product("c", "2025-03-30")]
        assert estimate_savings(items, today=TODAY) == 0

    def test_weigh_by_quantity(self):
        items = [
            _product("a", "2025-03-10", quantity="2"),
            _product("b", "2025-03-11", quantity="2-3"),
            _product("c", "2025-03-11", quantity="несколько"),
        ]
        result = estimate_savings(
            items, per_item=100, weigh_by_quantity=True, today=TODAY
        )
        assert result == 500  # 2 + 2 + 1


class TestRecipeSavings:
    def test_counts_critical_including_overdue(self):
        items = [
            _product("a", "2025-03-08"),
            _product("b", "2025-03-12"),
            _product("c", "2025-03-15"),
        ]
        assert recipe_savings(items, per_item=150, today=TODAY) == 300

    def test_weigh_by_quantity(self):
        items = [
            _product("a", "2025-03-09", quantity="3"),
            _product("b", "2025-03-30", quantity="5"),
        ]
        assert recipe_savings(items, per_item=100, weigh_by_quantity=True, today=TODAY) == 300


class TestGrouping:
    def test_group_by_category(self):
        items = [
            _product("Молоко", "2025-03-12", "dairy"),
            _product("Говядина", "2025-03-12", "meat"),
            _product("Кефир", "2025-03-12", "dairy"),
        ]
        groups = group_by_category(items)
        assert set(groups) == {"dairy", "meat"}
        assert [p.name for p in groups["dairy"]] == ["Молоко", "Кефир"]

    def test_count_by_status(self):
        items = [
            _product("a", "2025-03-10"),
            _product("b", "2025-03-15"),
            _product("c", "2025-03-30"),
            _product("d", "2025-03-01"),
        ]
        assert count_by_status(items, TODAY) == {
            "critical": 2,
            "warning": 1,
            "fresh": 1,
        }

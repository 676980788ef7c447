"""Tests for guest menu constraints, prompt and response parsing."""

import json

import pytest

from mealmind.errors import GenerationParseError, ValidationError
from mealmind.generation.guest_menu import (
    BUDGET_BANDS,
    GuestMenuConstraints,
    build_guest_menu_request,
    parse_guest_menu_response,
)


class TestGuestMenuConstraints:
    def test_targets(self):
        c = GuestMenuConstraints(guest_count=6, budget="economy")
        assert c.target_per_person == 875
        assert c.target_total == 5250

    @pytest.mark.parametrize("count", [0, 21, -1])
    def test_guest_count_bounds(self, count):
        with pytest.raises(ValidationError):
            GuestMenuConstraints(guest_count=count)

    def test_unknown_budget(self):
        with pytest.raises(ValidationError, match="Неизвестный бюджет"):
            GuestMenuConstraints(guest_count=4, budget="luxury")

    def test_bounds_inclusive(self):
        GuestMenuConstraints(guest_count=1)
        GuestMenuConstraints(guest_count=20)


def test_prompt_mentions_guests_city_and_band():
    c = GuestMenuConstraints(guest_count=8, budget="premium", city="Ош")
    prompt = build_guest_menu_request(c)
    low, high = BUDGET_BANDS["premium"]
    assert "8 гостей" in prompt
    assert "Город: Ош" in prompt
    assert f"{low}-{high} сом" in prompt
    assert '"appetizers"' in prompt


class TestParseGuestMenuResponse:
    def test_full_menu(self):
        payload = {
            "appetizers": [{"title": "Салат", "cookTime": 15, "estimatedCost": 400}],
            "mains": [
                {"title": "Плов", "cookTime": 90, "difficulty": "hard"},
                {"title": "Манты"},
            ],
            "desserts": [{"title": "Чак-чак"}],
            "beverages": [{"name": "Компот", "quantity": "3 л"}, "Чай"],
            "shoppingList": [
                {"name": "Баранина", "quantity": "2", "unit": "кг", "category": "meat"},
                {"name": "Рис", "category": "крупы"},
                {"quantity": "1"},
            ],
            "totalCost": 9000,
            "perPersonCost": 1500,
        }
        c = GuestMenuConstraints(guest_count=6)
        menu = parse_guest_menu_response(
            "Меню:\n" + json.dumps(payload, ensure_ascii=False), c
        )

        assert [d.title for d in menu.mains] == ["Плов", "Манты"]
        assert menu.appetizers[0].estimated_cost == 400
        assert menu.mains[1].servings == 6
        assert menu.mains[1].cook_time == 30
        assert [b.name for b in menu.beverages] == ["Компот", "Чай"]
        assert menu.beverages[0].quantity == "3 л"
        assert [i.name for i in menu.shopping_list] == ["Баранина", "Рис"]
        assert menu.shopping_list[1].category == "other"
        assert all(i.id and not i.checked for i in menu.shopping_list)
        assert menu.total_cost == 9000
        assert menu.per_person_cost == 1500
        assert len(menu.dishes()) == 4

    def test_costs_default_from_budget(self):
        c = GuestMenuConstraints(guest_count=4, budget="standard")
        menu = parse_guest_menu_response('{"mains": []}', c)
        assert menu.total_cost == c.target_total
        assert menu.per_person_cost == c.target_total / 4

    def test_per_person_derived_from_total(self):
        c = GuestMenuConstraints(guest_count=5)
        menu = parse_guest_menu_response('{"totalCost": 7500}', c)
        assert menu.per_person_cost == 1500

    def test_no_json_raises(self):
        c = GuestMenuConstraints(guest_count=2)
        with pytest.raises(GenerationParseError, match="меню"):
            parse_guest_menu_response("no menu today", c)

    def test_to_dict_shape(self):
        c = GuestMenuConstraints(guest_count=2, city="Бишкек")
        menu = parse_guest_menu_response('{"desserts": [{"title": "Торт"}]}', c)
        data = menu.to_dict()
        assert data["guestCount"] == 2
        assert data["courses"]["desserts"][0]["title"] == "Торт"
        assert data["city"] == "Бишкек"

"""Tests for InventoryRepository CRUD operations."""

from datetime import date

import pytest

from mealmind.db import CollectionStore, InventoryRepository, new_product
from mealmind.errors import NotFoundError, ValidationError
from mealmind.expiry import classify


@pytest.fixture
def store(tmp_path):
    s = CollectionStore(db_path=tmp_path / "test.db")
    yield s
    s.close()


@pytest.fixture
def inventory(store):
    return InventoryRepository(store)


@pytest.fixture
def sample_products():
    today = date(2025, 3, 10)
    return [
        new_product("Молоко", "1", "л", "dairy", today=today),
        new_product("Говядина", "0.5", "кг", "meat", expiry_date="2025-03-12"),
    ]


class TestNewProduct:
    def test_default_expiry_from_category(self):
        p = new_product("Кефир", category="dairy", today=date(2025, 3, 10))
        assert p.expiry_date == "2025-03-17"
        assert p.id
        assert p.added_at

    def test_explicit_expiry_normalized(self):
        p = new_product("Сыр", expiry_date="2025-04-01T10:00:00")
        assert p.expiry_date == "2025-04-01"

    def test_name_is_stripped(self):
        assert new_product("  Хлеб ").name == "Хлеб"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_rejected(self, name):
        with pytest.raises(ValidationError, match="название"):
            new_product(name)

    def test_unknown_category(self):
        assert new_product("X", category="snacks").category == "other"


def test_empty_inventory(inventory):
    assert inventory.list() == []


def test_add_and_list(inventory, sample_products):
    inventory.add(sample_products[0])
    result = inventory.add(sample_products[1])
    assert [p.name for p in result] == ["Молоко", "Говядина"]
    assert [p.name for p in inventory.list()] == ["Молоко", "Говядина"]


def test_add_many(inventory, sample_products):
    inventory.add_many(sample_products)
    assert len(inventory.list()) == 2


def test_get(inventory, sample_products):
    inventory.add_many(sample_products)
    assert inventory.get(sample_products[1].id).name == "Говядина"


def test_get_missing_raises(inventory):
    with pytest.raises(NotFoundError):
        inventory.get("missing")


def test_update(inventory, sample_products):
    inventory.add_many(sample_products)
    pid = sample_products[0].id
    inventory.update(pid, quantity="2", expiry_date="2025-03-20", category="bogus")

    updated = inventory.get(pid)
    assert updated.quantity == "2"
    assert updated.expiry_date == "2025-03-20"
    assert updated.category == "other"
    assert updated.name == "Молоко"


def test_update_rejects_unknown_fields(inventory, sample_products):
    inventory.add_many(sample_products)
    with pytest.raises(ValueError, match="Cannot edit"):
        inventory.update(sample_products[0].id, id="new-id")


def test_update_rejects_empty_name(inventory, sample_products):
    inventory.add_many(sample_products)
    with pytest.raises(ValidationError):
        inventory.update(sample_products[0].id, name="  ")


@pytest.mark.parametrize("field", ["expiry_date", "name", "quantity", "unit"])
def test_update_rejects_none(inventory, sample_products, field):
    inventory.add_many(sample_products)
    pid = sample_products[1].id
    with pytest.raises(ValidationError):
        inventory.update(pid, **{field: None})

    stored = inventory.get(pid)
    assert (stored.name, stored.quantity, stored.unit, stored.expiry_date) == (
        "Говядина",
        "0.5",
        "кг",
        "2025-03-12",
    )
    assert classify(stored.expiry_date, date(2025, 3, 10)) == "critical"


def test_update_unknown_id_is_noop(inventory, sample_products):
    inventory.add_many(sample_products)
    result = inventory.update("missing", quantity="9")
    assert [p.quantity for p in result] == ["1", "0.5"]


def test_delete(inventory, sample_products):
    inventory.add_many(sample_products)
    result = inventory.delete(sample_products[0].id)
    assert [p.name for p in result] == ["Говядина"]
    assert [p.name for p in inventory.list()] == ["Говядина"]


def test_delete_unknown_id_is_noop(inventory, sample_products):
    inventory.add_many(sample_products)
    assert len(inventory.delete("missing")) == 2


def test_confidence_survives_storage(inventory, sample_products):
    product = sample_products[0]
    product.confidence = 0.9
    inventory.add(product)
    assert inventory.get(product.id).confidence == 0.9

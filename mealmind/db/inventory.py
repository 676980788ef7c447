"""Inventory (fridge products) operations."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date

from ..errors import NotFoundError, ValidationError
from ..helpers import coerce_category, default_expiry, generate_id, now_iso, to_date
from ..models import Product
from .store import PRODUCTS, CollectionStore

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("name", "quantity", "unit", "category", "expiry_date")


def _require_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Введите название продукта")
    return name


def new_product(
    name: str,
    quantity: str = "1",
    unit: str = "шт",
    category: str = "other",
    expiry_date: str | date | None = None,
    today: date | None = None,
) -> Product:
    """Build a manually entered product.

    Without an explicit expiry date the category's default shelf life is
    applied.
    """
    category = coerce_category(category)
    if expiry_date is None:
        expiry = default_expiry(category, today)
    else:
        expiry = to_date(expiry_date).isoformat()
    return Product(
        id=generate_id(),
        name=_require_name(name),
        quantity=str(quantity or "1"),
        unit=unit or "шт",
        category=category,
        expiry_date=expiry,
        added_at=now_iso(),
    )


class InventoryRepository:
    """Manages the products collection."""

    def __init__(self, store: CollectionStore) -> None:
        self._store = store

    def list(self) -> list[Product]:
        return [Product.from_dict(d) for d in self._store.get(PRODUCTS, [])]

    def _save(self, products: list[Product]) -> list[Product]:
        self._store.set(PRODUCTS, [p.to_dict() for p in products])
        return products

    def get(self, product_id: str) -> Product:
        for product in self.list():
            if product.id == product_id:
                return product
        raise NotFoundError(f"Продукт не найден: {product_id}")

    def add(self, product: Product) -> list[Product]:
        _require_name(product.name)
        products = self.list()
        products.append(product)
        return self._save(products)

    def add_many(self, new_products: list[Product]) -> list[Product]:
        for product in new_products:
            _require_name(product.name)
        return self._save(self.list() + list(new_products))

    def update(self, product_id: str, **changes) -> list[Product]:
        """Apply a partial edit; unknown ids are ignored.

        Raises:
            ValidationError: A field is set to ``None`` or the name is blank.
        """
        unknown = set(changes) - set(_EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot edit fields: {sorted(unknown)}")
        cleared = sorted(k for k, v in changes.items() if v is None)
        if cleared:
            raise ValidationError(f"Поле не может быть пустым: {', '.join(cleared)}")
        if "name" in changes:
            changes["name"] = _require_name(changes["name"])
        if "category" in changes:
            changes["category"] = coerce_category(changes["category"])
        if "expiry_date" in changes:
            changes["expiry_date"] = to_date(changes["expiry_date"]).isoformat()

        products = self.list()
        for i, product in enumerate(products):
            if product.id == product_id:
                products[i] = replace(product, **changes)
                return self._save(products)
        logger.debug("update: no product with id %s", product_id)
        return products

    def delete(self, product_id: str) -> list[Product]:
        products = self.list()
        remaining = [p for p in products if p.id != product_id]
        if len(remaining) == len(products):
            logger.debug("delete: no product with id %s", product_id)
            return products
        return self._save(remaining)

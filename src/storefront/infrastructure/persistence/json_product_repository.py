"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_store import JsonFileStore


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._store.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._store.load()]

    def next_id(self) -> str:
        records = self._store.load()
        if not records:
            return "1"
        return str(max(int(r["id"]) for r in records) + 1)

    def save(self, product: Product) -> None:
        with self._store.locked() as records:
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    updated = self._to_raw(product)
                    updated["stock"] = raw["stock"]  # stock is owned by the ledger
                    records[i] = updated
                    return
            records.append(self._to_raw(product))

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        with self._store.locked() as records:
            for raw in records:
                if raw["id"] != product_id:
                    continue
                if not raw.get("is_active", True) or raw["stock"] < quantity:
                    return False
                raw["stock"] -= quantity
                raw["updated_at"] = _now_iso()
                return True
        return False

    def increment_stock(self, product_id: str, quantity: int) -> bool:
        with self._store.locked() as records:
            for raw in records:
                if raw["id"] == product_id:
                    raw["stock"] += quantity
                    raw["updated_at"] = _now_iso()
                    return True
        return False

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "discount_price": (
                str(product.discount_price.amount) if product.discount_price else None
            ),
            "stock": product.stock,
            "is_active": product.is_active,
            "image_url": product.image_url,
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        currency = raw.get("currency", "USD")
        discount = raw.get("discount_price")
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), currency),
            stock=raw.get("stock", 0),
            discount_price=Money(Decimal(discount), currency) if discount else None,
            is_active=raw.get("is_active", True),
            image_url=raw.get("image_url"),
            updated_at=(
                datetime.fromisoformat(raw["updated_at"])
                if raw.get("updated_at")
                else datetime.now(timezone.utc)
            ),
        )


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()

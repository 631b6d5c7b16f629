"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_store import JsonFileStore


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- CartRepository interface ---------------------------------------------

    def get_by_user_id(self, user_id: str) -> Cart | None:
        for raw in self._store.load():
            if raw["user_id"] == user_id:
                return self._to_domain(raw)
        return None

    def save(self, cart: Cart) -> None:
        with self._store.locked() as records:
            for i, raw in enumerate(records):
                if raw["user_id"] == cart.user_id:
                    records[i] = self._to_raw(cart)
                    return
            records.append(self._to_raw(cart))

    def list_stale(self, updated_before: datetime) -> list[Cart]:
        carts = [self._to_domain(raw) for raw in self._store.load() if raw["items"]]
        return [c for c in carts if c.updated_at < updated_before]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "user_id": cart.user_id,
            "discount": str(cart.discount.amount),
            "created_at": cart.created_at.isoformat(),
            "updated_at": cart.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "product_image": item.product_image,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                    "quantity": item.quantity.value,
                }
                for item in cart.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        items = [
            CartItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
                quantity=Quantity(i["quantity"]),
                product_image=i.get("product_image"),
            )
            for i in raw["items"]
        ]
        return Cart(
            user_id=raw["user_id"],
            items=items,
            discount=Money(Decimal(raw.get("discount", "0.00"))),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable

from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentStatus,
)
from storefront.domain.model.value_objects import (
    Address,
    Money,
    PaymentMethod,
    Quantity,
)
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_store import JsonFileStore

_MONEY_FIELDS = ("subtotal", "tax", "shipping", "discount", "total")
_TIMESTAMP_FIELDS = ("shipped_at", "delivered_at", "cancelled_at")


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        return self._next_id(self._store.load())

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._store.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_order_number(self, order_number: str) -> Order | None:
        for raw in self._store.load():
            if raw["order_number"] == order_number:
                return self._to_domain(raw)
        return None

    def list_by_user_id(self, user_id: str) -> list[Order]:
        return self._matching(lambda raw: raw["user_id"] == user_id)

    def list_all(self) -> list[Order]:
        return self._matching(lambda raw: True)

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        return self._matching(lambda raw: raw["status"] == status.value)

    def list_by_payment_status(self, payment_status: PaymentStatus) -> list[Order]:
        return self._matching(lambda raw: raw["payment_status"] == payment_status.value)

    def save(self, order: Order) -> None:
        with self._store.locked() as orders:
            if order.id is None:
                order.id = self._next_id(orders)

            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    return
            orders.append(self._to_raw(order))

    def delete(self, order_id: int) -> None:
        with self._store.locked() as orders:
            orders[:] = [raw for raw in orders if raw["id"] != order_id]

    def _matching(self, predicate: Callable[[dict], bool]) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._store.load() if predicate(raw)]
        return sorted(orders, key=lambda o: (o.created_at, o.id), reverse=True)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _next_id(orders: list[dict]) -> int:
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    @staticmethod
    def _to_raw(order: Order) -> dict:
        address = order.shipping_address
        raw = {
            "id": order.id,
            "order_number": order.order_number,
            "user_id": order.user_id,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "payment_method": order.payment_method.value,
            "currency": order.total.currency,
            "shipping_address": {
                "full_name": address.full_name,
                "street": address.street,
                "line2": address.line2,
                "city": address.city,
                "state": address.state,
                "postal_code": address.postal_code,
                "country": address.country,
                "phone": address.phone,
            },
            "tracking_number": order.tracking_number,
            "carrier": order.carrier,
            "cancellation_reason": order.cancellation_reason,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "product_image": item.product_image,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }
        for name in _MONEY_FIELDS:
            raw[name] = str(getattr(order, name).amount)
        for name in _TIMESTAMP_FIELDS:
            value = getattr(order, name)
            raw[name] = value.isoformat() if value else None
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        items = tuple(
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", currency)),
                product_image=i.get("product_image"),
            )
            for i in raw["items"]
        )
        money = {name: Money(Decimal(raw[name]), currency) for name in _MONEY_FIELDS}
        timestamps = {
            name: datetime.fromisoformat(raw[name]) if raw.get(name) else None
            for name in _TIMESTAMP_FIELDS
        }
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            user_id=raw["user_id"],
            items=items,
            shipping_address=Address(**raw["shipping_address"]),
            payment_method=PaymentMethod(raw["payment_method"]),
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            tracking_number=raw.get("tracking_number"),
            carrier=raw.get("carrier"),
            cancellation_reason=raw.get("cancellation_reason"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            **money,
            **timestamps,
        )

"""In-memory fakes for testing.

The repositories implement the same abstract interfaces as the JSON
repositories but keep everything in a dict. They hand out and store
deep copies, so an unsaved change to an aggregate never leaks into the
store, just as with a real database. No file I/O, no side effects.
"""

from __future__ import annotations

import copy
import threading
from datetime import datetime
from typing import Any, Callable, Iterable

from storefront.application.ports import Cache, Notifier, UserDirectory
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order, OrderStatus, PaymentStatus
from storefront.domain.model.product import Product
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        self._lock = threading.Lock()
        self.before_decrement: Callable[[str], None] | None = None
        for p in products or []:
            self._store[p.id] = copy.deepcopy(p)

    def get_by_id(self, product_id: str) -> Product | None:
        return copy.deepcopy(self._store.get(product_id))

    def list_all(self) -> list[Product]:
        return [copy.deepcopy(p) for p in self._store.values()]

    def next_id(self) -> str:
        if not self._store:
            return "1"
        return str(max(int(pid) for pid in self._store) + 1)

    def save(self, product: Product) -> None:
        with self._lock:
            stored = copy.deepcopy(product)
            existing = self._store.get(product.id)
            if existing is not None:
                stored.stock = existing.stock
            self._store[product.id] = stored

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        if self.before_decrement is not None:
            self.before_decrement(product_id)
        with self._lock:
            product = self._store.get(product_id)
            if product is None or not product.is_active or product.stock < quantity:
                return False
            product.stock -= quantity
            return True

    def increment_stock(self, product_id: str, quantity: int) -> bool:
        with self._lock:
            product = self._store.get(product_id)
            if product is None:
                return False
            product.stock += quantity
            return True

    # --- Test helpers ---------------------------------------------------------

    def set_stock(self, product_id: str, stock: int) -> None:
        """Simulate another process changing stock behind our back."""
        with self._lock:
            self._store[product_id].stock = stock

    def stock(self, product_id: str) -> int:
        return self._store[product_id].stock


class FakeCartRepository(CartRepository):

    def __init__(self, carts: list[Cart] | None = None) -> None:
        self._store: dict[str, Cart] = {}
        self.fail_on_save = False
        for c in carts or []:
            self._store[c.user_id] = copy.deepcopy(c)

    def get_by_user_id(self, user_id: str) -> Cart | None:
        return copy.deepcopy(self._store.get(user_id))

    def save(self, cart: Cart) -> None:
        if self.fail_on_save:
            raise RuntimeError("cart store unavailable")
        self._store[cart.user_id] = copy.deepcopy(cart)

    def list_stale(self, updated_before: datetime) -> list[Cart]:
        return [
            copy.deepcopy(c)
            for c in self._store.values()
            if c.items and c.updated_at < updated_before
        ]


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1
        self.failing_saves = 0

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        return copy.deepcopy(self._store.get(order_id))

    def get_by_order_number(self, order_number: str) -> Order | None:
        for order in self._store.values():
            if order.order_number == order_number:
                return copy.deepcopy(order)
        return None

    def list_by_user_id(self, user_id: str) -> list[Order]:
        return self._newest_first(o for o in self._store.values() if o.user_id == user_id)

    def list_all(self) -> list[Order]:
        return self._newest_first(self._store.values())

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        return self._newest_first(o for o in self._store.values() if o.status == status)

    def list_by_payment_status(self, payment_status: PaymentStatus) -> list[Order]:
        return self._newest_first(
            o for o in self._store.values() if o.payment_status == payment_status
        )

    def save(self, order: Order) -> None:
        if self.failing_saves:
            self.failing_saves -= 1
            raise RuntimeError("order store unavailable")
        if order.id is None:
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = copy.deepcopy(order)

    def delete(self, order_id: int) -> None:
        self._store.pop(order_id, None)

    def count(self) -> int:
        return len(self._store)

    @staticmethod
    def _newest_first(orders: Iterable[Order]) -> list[Order]:
        copies = [copy.deepcopy(o) for o in orders]
        return sorted(copies, key=lambda o: (o.created_at, o.id), reverse=True)


class FakeCache(Cache):

    def __init__(self) -> None:
        self.entries: dict[tuple[str, str], Any] = {}
        self.evicted: list[tuple[str, str]] = []
        self.reads = 0

    def get(self, scope: str, key: str) -> Any | None:
        self.reads += 1
        return self.entries.get((scope, key))

    def put(self, scope: str, key: str, value: Any) -> None:
        self.entries[(scope, key)] = value

    def evict(self, scope: str, key: str) -> None:
        self.evicted.append((scope, key))
        self.entries.pop((scope, key), None)


class FakeNotifier(Notifier):

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[tuple[str, str, str]] = []

    def _record(self, kind: str, email: str, order: Order) -> None:
        if self.fail:
            raise ConnectionError("SMTP server unreachable")
        self.sent.append((kind, email, order.order_number))

    def send_order_confirmation(self, email: str, order: Order) -> None:
        self._record("confirmation", email, order)

    def send_order_cancellation(self, email: str, order: Order, reason: str | None) -> None:
        self._record("cancellation", email, order)

    def send_order_status_update(self, email: str, order: Order) -> None:
        self._record("status_update", email, order)

    def send_order_tracking(self, email: str, order: Order) -> None:
        self._record("tracking", email, order)


class FakeUserDirectory(UserDirectory):

    def __init__(self, emails: dict[str, str] | None = None) -> None:
        self._emails = dict(emails or {})

    def email_for(self, user_id: str) -> str | None:
        return self._emails.get(user_id)

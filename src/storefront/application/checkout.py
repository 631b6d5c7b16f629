"""Application service: Checkout use case.

Turns the user's cart into a PENDING order:

1. Load the cart; an empty cart cannot be checked out.
2. Check every line against live stock. Nothing is written if any
   line fails.
3. Persist the order (items are a snapshot copy of the cart lines).
4. Debit stock for every line.
5. Empty the cart.

Steps 3-5 touch three stores with no shared transaction, so they run
inside a ``Saga``: if a debit fails because stock moved since step 2,
the debits already applied are credited back and the order is deleted
before the error reaches the caller. Cache eviction and the
confirmation email come afterwards and are best-effort.
"""

from __future__ import annotations

import functools
import logging

from storefront.application.caching import evict_cart, evict_order
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.notifications import OrderNotifications
from storefront.application.ports import Cache
from storefront.application.saga import Saga
from storefront.domain.exceptions import EmptyCartError, InsufficientStockError
from storefront.domain.model.order import Order
from storefront.domain.model.value_objects import Address, PaymentMethod
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import InventoryLedger
from storefront.domain.service.order_number import OrderNumberGenerator

logger = logging.getLogger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        notifications: OrderNotifications | None = None,
        cache: Cache | None = None,
        order_numbers: OrderNumberGenerator | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._notifications = notifications
        self._cache = cache
        self._order_numbers = order_numbers or OrderNumberGenerator(order_repo)

    def handle(
        self,
        user_id: str,
        shipping_address: Address,
        payment_method: PaymentMethod,
    ) -> OrderDTO:
        cart = self._cart_repo.get_by_user_id(user_id)
        if cart is None or cart.is_empty:
            raise EmptyCartError("Cannot create an order from an empty cart")

        ledger = InventoryLedger(self._product_repo)
        for item in cart.items:
            if not ledger.check_available(item.product_id, item.quantity.value):
                raise InsufficientStockError(
                    f"Insufficient stock for product: {item.product_name}"
                )

        order = Order.create(
            order_number=self._order_numbers.next_number(),
            user_id=user_id,
            items=cart.items,
            totals=cart.totals,
            shipping_address=shipping_address,
            payment_method=payment_method,
        )

        with Saga(f"checkout {order.order_number}") as saga:
            self._order_repo.save(order)
            saga.on_rollback(
                f"delete order {order.order_number}",
                functools.partial(self._order_repo.delete, order.id),
            )

            for line in order.items:
                ledger.debit(line.product_id, line.quantity.value)
                saga.on_rollback(
                    f"credit {line.quantity.value} x {line.product_id}",
                    functools.partial(ledger.credit, line.product_id, line.quantity.value),
                )

            cart.clear()
            self._cart_repo.save(cart)

        evict_cart(self._cache, user_id)
        evict_order(self._cache, order)
        if self._notifications is not None:
            self._notifications.confirmation(order)

        logger.info(
            "Order %s (#%s) created for user %s, total %s",
            order.order_number, order.id, user_id, order.total,
        )
        return order_to_dto(order)

"""Application service: Cancel Order use case.

Only PENDING, CONFIRMED and PROCESSING orders can be cancelled here.
Every line's quantity is credited back to stock, whether or not the
product is still sold. A product record that no longer exists at all is
logged and skipped so the cancellation itself still goes through.

The credits and the write of the CANCELLED order run inside a ``Saga``:
if the order cannot be saved, the credits already applied are debited
again, so a retried cancellation never returns the same units twice.
"""

from __future__ import annotations

import functools
import logging

from storefront.application.caching import evict_order
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.notifications import OrderNotifications
from storefront.application.ports import Cache
from storefront.application.saga import Saga
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        notifications: OrderNotifications | None = None,
        cache: Cache | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._notifications = notifications
        self._cache = cache

    def handle(self, order_id: int, reason: str | None = None) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        # Raises InvalidStateError for SHIPPED and later
        order.cancel(reason)

        ledger = InventoryLedger(self._product_repo)
        with Saga(f"cancel {order.order_number}") as saga:
            for line in order.items:
                try:
                    ledger.credit(line.product_id, line.quantity.value)
                except EntityNotFoundError:
                    logger.warning(
                        "Product %s no longer exists; not restocking %d unit(s) for order %s",
                        line.product_id, line.quantity.value, order.order_number,
                    )
                    continue
                saga.on_rollback(
                    f"debit {line.quantity.value} x {line.product_id}",
                    functools.partial(ledger.debit, line.product_id, line.quantity.value),
                )

            self._order_repo.save(order)

        evict_order(self._cache, order)

        if self._notifications is not None:
            self._notifications.cancellation(order, reason)

        logger.info("Order #%s cancelled (reason: %s)", order_id, reason or "none given")
        return order_to_dto(order)

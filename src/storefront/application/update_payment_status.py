"""Application service: Update Payment Status use case.

A completed payment confirms a PENDING order (see
``Order.set_payment_status``); the customer is told about that status
change. Other payment updates leave the order status alone and send
nothing.
"""

from __future__ import annotations

import logging

from storefront.application.caching import evict_order
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.notifications import OrderNotifications
from storefront.application.ports import Cache
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import PaymentStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdatePaymentStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifications: OrderNotifications | None = None,
        cache: Cache | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._notifications = notifications
        self._cache = cache

    def handle(self, order_id: int, payment_status: PaymentStatus) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        previous = order.status
        order.set_payment_status(payment_status)
        self._order_repo.save(order)
        evict_order(self._cache, order)

        if order.status != previous and self._notifications is not None:
            self._notifications.status_update(order)

        logger.info("Payment status of order #%s set to %s", order_id, payment_status.value)
        return order_to_dto(order)

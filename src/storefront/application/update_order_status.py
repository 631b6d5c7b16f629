"""Application service: Update Order Status use case.

Moves an order along the status table. This path does not touch stock;
customer cancellations that return stock go through CancelOrderHandler.
"""

from __future__ import annotations

import logging

from storefront.application.caching import evict_order
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.notifications import OrderNotifications
from storefront.application.ports import Cache
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifications: OrderNotifications | None = None,
        cache: Cache | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._notifications = notifications
        self._cache = cache

    def handle(self, order_id: int, new_status: OrderStatus) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        previous = order.status
        order.transition_to(new_status)
        self._order_repo.save(order)
        evict_order(self._cache, order)

        if self._notifications is not None:
            self._notifications.status_update(order)

        logger.info(
            "Order #%s moved from %s to %s", order_id, previous.value, new_status.value
        )
        return order_to_dto(order)

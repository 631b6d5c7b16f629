"""Application service: Add Tracking Info use case (SHIPPED orders only)."""

from __future__ import annotations

import logging

from storefront.application.caching import evict_order
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.notifications import OrderNotifications
from storefront.application.ports import Cache
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class AddTrackingInfoHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifications: OrderNotifications | None = None,
        cache: Cache | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._notifications = notifications
        self._cache = cache

    def handle(self, order_id: int, tracking_number: str, carrier: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        order.add_tracking_info(tracking_number, carrier)
        self._order_repo.save(order)
        evict_order(self._cache, order)

        if self._notifications is not None:
            self._notifications.tracking(order)

        logger.info("Tracking %s (%s) added to order #%s", tracking_number, carrier, order_id)
        return order_to_dto(order)

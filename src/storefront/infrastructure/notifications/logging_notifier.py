"""Notifier adapter that records outgoing order emails in the log.

Email delivery belongs to a separate service; this adapter is what the
CLI wires in so every notification is visible.
"""

from __future__ import annotations

import logging

from storefront.application.ports import Notifier
from storefront.domain.model.order import Order

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):

    def send_order_confirmation(self, email: str, order: Order) -> None:
        logger.info(
            "Email to %s: order %s confirmed, total %s",
            email, order.order_number, order.total,
        )

    def send_order_cancellation(self, email: str, order: Order, reason: str | None) -> None:
        logger.info(
            "Email to %s: order %s cancelled (%s)",
            email, order.order_number, reason or "no reason given",
        )

    def send_order_status_update(self, email: str, order: Order) -> None:
        logger.info(
            "Email to %s: order %s is now %s",
            email, order.order_number, order.status.value,
        )

    def send_order_tracking(self, email: str, order: Order) -> None:
        logger.info(
            "Email to %s: order %s shipped with %s, tracking %s",
            email, order.order_number, order.carrier, order.tracking_number,
        )

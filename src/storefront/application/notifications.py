"""Best-effort order notifications.

Looks up the customer's email and forwards to the Notifier port.
A failed lookup or send is logged; it never fails the use case that
triggered it.
"""

from __future__ import annotations

import logging

from storefront.application.ports import Notifier, UserDirectory
from storefront.domain.model.order import Order

logger = logging.getLogger(__name__)


class OrderNotifications:

    def __init__(self, notifier: Notifier, user_directory: UserDirectory) -> None:
        self._notifier = notifier
        self._user_directory = user_directory

    def confirmation(self, order: Order) -> None:
        email = self._email_for(order)
        if email is None:
            return
        try:
            self._notifier.send_order_confirmation(email, order)
        except Exception:
            logger.exception("Failed to send confirmation for order %s", order.order_number)

    def cancellation(self, order: Order, reason: str | None) -> None:
        email = self._email_for(order)
        if email is None:
            return
        try:
            self._notifier.send_order_cancellation(email, order, reason)
        except Exception:
            logger.exception("Failed to send cancellation for order %s", order.order_number)

    def status_update(self, order: Order) -> None:
        email = self._email_for(order)
        if email is None:
            return
        try:
            self._notifier.send_order_status_update(email, order)
        except Exception:
            logger.exception("Failed to send status update for order %s", order.order_number)

    def tracking(self, order: Order) -> None:
        email = self._email_for(order)
        if email is None:
            return
        try:
            self._notifier.send_order_tracking(email, order)
        except Exception:
            logger.exception("Failed to send tracking info for order %s", order.order_number)

    def _email_for(self, order: Order) -> str | None:
        try:
            email = self._user_directory.email_for(order.user_id)
        except Exception:
            logger.exception("User lookup failed for %s", order.user_id)
            return None
        if email is None:
            logger.warning(
                "No email on file for user %s; skipping notification for order %s",
                order.user_id,
                order.order_number,
            )
        return email

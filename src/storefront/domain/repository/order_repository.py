"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderStatus, PaymentStatus


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Order | None:
        """Return an order by its public order number, or None."""

    @abstractmethod
    def list_by_user_id(self, user_id: str) -> list[Order]:
        """Return the user's orders, newest first."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def list_by_status(self, status: OrderStatus) -> list[Order]:
        """Return the orders in *status*, newest first."""

    @abstractmethod
    def list_by_payment_status(self, payment_status: PaymentStatus) -> list[Order]:
        """Return the orders whose payment is in *payment_status*, newest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order."""

    @abstractmethod
    def delete(self, order_id: int) -> None:
        """Remove an order. Deleting a missing order is a no-op."""

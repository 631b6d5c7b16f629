"""Ports for the collaborators the use cases call out to.

None of these carry business logic. Adapters live in the
infrastructure layer; tests use the fakes in ``tests/fakes.py``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from storefront.domain.model.order import Order


class Cache(ABC):
    """Best-effort read cache. A cache that never hits is still correct."""

    @abstractmethod
    def get(self, scope: str, key: str) -> Any | None:
        """Return the cached value, or None on a miss."""

    @abstractmethod
    def put(self, scope: str, key: str, value: Any) -> None:
        """Store *value* under (*scope*, *key*)."""

    @abstractmethod
    def evict(self, scope: str, key: str) -> None:
        """Drop (*scope*, *key*) if present."""


class Notifier(ABC):
    """Sends customer-facing order emails."""

    @abstractmethod
    def send_order_confirmation(self, email: str, order: Order) -> None: ...

    @abstractmethod
    def send_order_cancellation(self, email: str, order: Order, reason: str | None) -> None: ...

    @abstractmethod
    def send_order_status_update(self, email: str, order: Order) -> None: ...

    @abstractmethod
    def send_order_tracking(self, email: str, order: Order) -> None: ...


class UserDirectory(ABC):
    """Lookup-only view of the user accounts owned by the auth service."""

    @abstractmethod
    def email_for(self, user_id: str) -> str | None:
        """Return the user's email address, or None if unknown."""

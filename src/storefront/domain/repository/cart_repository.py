"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_by_user_id(self, user_id: str) -> Cart | None:
        """Return the user's cart, or None if they never added anything."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart."""

    @abstractmethod
    def list_stale(self, updated_before: datetime) -> list[Cart]:
        """Return carts that still hold items and were last touched before *updated_before*."""

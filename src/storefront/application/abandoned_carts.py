"""Application services: find and clean up abandoned carts.

A cart is abandoned when it still holds items but nobody has touched it
for *days* days. Cleanup empties such carts in place; the cart records
themselves are kept.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from storefront.application.caching import evict_cart
from storefront.application.dto import CartDTO, cart_to_dto
from storefront.application.ports import Cache
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart
from storefront.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _stale_carts(
    cart_repo: CartRepository, days: int, clock: Callable[[], datetime]
) -> list[Cart]:
    if days < 0:
        raise ValidationError("Days since last update cannot be negative")
    return cart_repo.list_stale(clock() - timedelta(days=days))


class ListAbandonedCartsHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._cart_repo = cart_repo
        self._clock = clock

    def handle(self, days: int) -> tuple[CartDTO, ...]:
        return tuple(cart_to_dto(c) for c in _stale_carts(self._cart_repo, days, self._clock))


class CleanupExpiredCartsHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        cache: Cache | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._cart_repo = cart_repo
        self._cache = cache
        self._clock = clock

    def handle(self, days: int) -> int:
        """Empty every abandoned cart and return how many were cleared."""
        carts = _stale_carts(self._cart_repo, days, self._clock)
        for cart in carts:
            cart.clear()
            self._cart_repo.save(cart)
            evict_cart(self._cache, cart.user_id)

        logger.info("Cleaned up %d cart(s) idle for more than %d day(s)", len(carts), days)
        return len(carts)

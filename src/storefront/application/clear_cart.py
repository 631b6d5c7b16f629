"""Application service: Clear Cart use case.

Idempotent: clearing an empty or never-created cart succeeds.
"""

from __future__ import annotations

import logging

from storefront.application.caching import evict_cart
from storefront.application.dto import CartDTO, cart_to_dto, empty_cart_dto
from storefront.application.ports import Cache
from storefront.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository, cache: Cache | None = None) -> None:
        self._cart_repo = cart_repo
        self._cache = cache

    def handle(self, user_id: str) -> CartDTO:
        cart = self._cart_repo.get_by_user_id(user_id)
        if cart is None:
            return empty_cart_dto(user_id)

        cart.clear()
        self._cart_repo.save(cart)
        evict_cart(self._cache, user_id)

        logger.info("Cleared cart of user %s", user_id)
        return cart_to_dto(cart)

"""Application service: Remove Cart Item use case."""

from __future__ import annotations

import logging

from storefront.application.caching import evict_cart
from storefront.application.dto import CartDTO, cart_to_dto
from storefront.application.ports import Cache
from storefront.domain.exceptions import ItemNotFoundError
from storefront.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


class RemoveCartItemHandler:

    def __init__(self, cart_repo: CartRepository, cache: Cache | None = None) -> None:
        self._cart_repo = cart_repo
        self._cache = cache

    def handle(self, user_id: str, product_id: str) -> CartDTO:
        cart = self._cart_repo.get_by_user_id(user_id)
        if cart is None:
            raise ItemNotFoundError(f"Product ID '{product_id}' is not in the cart")

        cart.remove_item(product_id)
        self._cart_repo.save(cart)
        evict_cart(self._cache, user_id)

        logger.info("Removed %s from cart of user %s", product_id, user_id)
        return cart_to_dto(cart)

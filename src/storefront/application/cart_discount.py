"""Application services: apply / remove a cart discount.

The discount amount comes from the coupon service and is taken as given.
"""

from __future__ import annotations

import logging

from storefront.application.caching import evict_cart
from storefront.application.dto import CartDTO, cart_to_dto
from storefront.application.ports import Cache
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


class ApplyDiscountHandler:

    def __init__(self, cart_repo: CartRepository, cache: Cache | None = None) -> None:
        self._cart_repo = cart_repo
        self._cache = cache

    def handle(self, user_id: str, amount: str) -> CartDTO:
        cart = self._cart_repo.get_by_user_id(user_id)
        if cart is None:
            raise EntityNotFoundError(f"Cart not found for user '{user_id}'")

        cart.apply_discount(Money.of(amount))
        self._cart_repo.save(cart)
        evict_cart(self._cache, user_id)

        logger.info("Applied discount %s to cart of user %s", amount, user_id)
        return cart_to_dto(cart)


class RemoveDiscountHandler:

    def __init__(self, cart_repo: CartRepository, cache: Cache | None = None) -> None:
        self._cart_repo = cart_repo
        self._cache = cache

    def handle(self, user_id: str) -> CartDTO:
        cart = self._cart_repo.get_by_user_id(user_id)
        if cart is None:
            raise EntityNotFoundError(f"Cart not found for user '{user_id}'")

        cart.remove_discount()
        self._cart_repo.save(cart)
        evict_cart(self._cache, user_id)
        return cart_to_dto(cart)

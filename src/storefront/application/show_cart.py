"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.caching import CART_SCOPE, cached
from storefront.application.dto import CartDTO, cart_to_dto, empty_cart_dto
from storefront.application.ports import Cache
from storefront.domain.repository.cart_repository import CartRepository


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository, cache: Cache | None = None) -> None:
        self._cart_repo = cart_repo
        self._cache = cache

    @cached(CART_SCOPE)
    def handle(self, user_id: str) -> CartDTO:
        cart = self._cart_repo.get_by_user_id(user_id)
        if cart is None:
            return empty_cart_dto(user_id)
        return cart_to_dto(cart)

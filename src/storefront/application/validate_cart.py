"""Application service: Validate Cart use case.

Re-synchronises a cart with the live catalog before checkout:

- lines for missing or inactive products are dropped
- quantities above current stock are clamped down (a product with no
  stock left is dropped, since a line cannot hold zero units)
- unit prices are refreshed to the current effective price

The cart is only written back when something changed.
"""

from __future__ import annotations

import logging

from storefront.application.caching import evict_cart
from storefront.application.dto import CartDTO, cart_to_dto, empty_cart_dto
from storefront.application.ports import Cache
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ValidateCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        cache: Cache | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._cache = cache

    def handle(self, user_id: str) -> tuple[CartDTO, bool]:
        """Return the validated cart and whether any line was modified."""
        cart = self._cart_repo.get_by_user_id(user_id)
        if cart is None:
            return empty_cart_dto(user_id), False

        modified = False
        for item in list(cart.items):
            product = self._product_repo.get_by_id(item.product_id)
            if product is None or not product.is_active:
                logger.warning("Removing unavailable product %s from cart", item.product_id)
                cart.remove_item(item.product_id)
                modified = True
                continue

            if product.stock <= 0:
                logger.warning("Removing out-of-stock product %s from cart", item.product_id)
                cart.remove_item(item.product_id)
                modified = True
                continue

            if item.quantity.value > product.stock:
                logger.warning(
                    "Adjusting quantity for product %s from %d to %d",
                    item.product_id, item.quantity.value, product.stock,
                )
                cart.update_quantity(item.product_id, Quantity(product.stock))
                modified = True

            current_price = product.effective_price
            if item.unit_price != current_price:
                logger.warning(
                    "Updating price for product %s from %s to %s",
                    item.product_id, item.unit_price, current_price,
                )
                cart.reprice(item.product_id, current_price)
                modified = True

        if modified:
            self._cart_repo.save(cart)
            evict_cart(self._cache, user_id)

        return cart_to_dto(cart), modified

"""Application service: Add To Cart use case.

Creates the cart lazily on the first add. Adding a product that is
already in the cart merges the quantities, and the merged total (not
just the delta) is checked against stock.
"""

from __future__ import annotations

import logging

from storefront.application.caching import evict_cart
from storefront.application.dto import CartDTO, cart_to_dto
from storefront.application.ports import Cache
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ProductUnavailableError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        cache: Cache | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._cache = cache

    def handle(self, user_id: str, product_id: str, quantity: int) -> CartDTO:
        qty = Quantity(quantity)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        if not product.is_active:
            raise ProductUnavailableError(f"Product '{product.name}' is not available")

        cart = self._cart_repo.get_by_user_id(user_id)
        if cart is None:
            logger.debug("Creating cart for user %s", user_id)
            cart = Cart(user_id=user_id)

        requested = cart.quantity_of(product_id) + qty.value
        ledger = InventoryLedger(self._product_repo)
        if not ledger.check_available(product_id, requested):
            raise InsufficientStockError(
                f"Insufficient stock for {product.name} "
                f"(requested {requested}, available {product.stock})"
            )

        cart.add_item(product, qty)
        self._cart_repo.save(cart)
        evict_cart(self._cache, user_id)

        logger.info("Added %d x %s to cart of user %s", qty.value, product_id, user_id)
        return cart_to_dto(cart)

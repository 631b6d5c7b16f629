"""Application service: Update Cart Item use case.

Sets a line's quantity outright. Zero or negative quantities are
rejected; removing a line is a separate use case.
"""

from __future__ import annotations

import logging

from storefront.application.caching import evict_cart
from storefront.application.dto import CartDTO, cart_to_dto
from storefront.application.ports import Cache
from storefront.domain.exceptions import InsufficientStockError, ItemNotFoundError
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class UpdateCartItemHandler:

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

        cart = self._cart_repo.get_by_user_id(user_id)
        if cart is None or cart.find_item(product_id) is None:
            raise ItemNotFoundError(f"Product ID '{product_id}' is not in the cart")

        ledger = InventoryLedger(self._product_repo)
        if not ledger.check_available(product_id, qty.value):
            item = cart.find_item(product_id)
            raise InsufficientStockError(
                f"Insufficient stock for {item.product_name} (requested {qty.value})"
            )

        cart.update_quantity(product_id, qty)
        self._cart_repo.save(cart)
        evict_cart(self._cache, user_id)

        logger.info("Set quantity of %s to %d for user %s", product_id, qty.value, user_id)
        return cart_to_dto(cart)

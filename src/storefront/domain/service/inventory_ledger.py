"""Domain service: Inventory Ledger.

The only place stock counts change. Every debit goes through the
repository's conditional decrement, which checks and writes under one
store-level lock, so two checkouts racing for the last unit can never
both win.

``check_available`` is a plain read. It does not hold anything back, so
callers that act on it later must still expect ``debit`` to fail.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class InventoryLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def check_available(self, product_id: str, quantity: int) -> bool:
        """True if the product is active and has at least *quantity* in stock."""
        product = self._product_repo.get_by_id(product_id)
        if product is None or not product.is_active:
            return False
        return product.stock >= quantity

    def stock_of(self, product_id: str) -> int:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product.stock

    def debit(self, product_id: str, quantity: int) -> None:
        """Take *quantity* units out of stock or raise InsufficientStockError.

        A rejected debit leaves the stored stock untouched.
        """
        Quantity(quantity)
        if not self._product_repo.decrement_stock(product_id, quantity):
            raise InsufficientStockError(self._debit_failure_message(product_id, quantity))
        logger.info("Debited %d unit(s) of product %s", quantity, product_id)

    def credit(self, product_id: str, quantity: int) -> None:
        """Put *quantity* units back. No upper bound."""
        Quantity(quantity)
        if not self._product_repo.increment_stock(product_id, quantity):
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        logger.info("Credited %d unit(s) of product %s", quantity, product_id)

    def restock(self, product_id: str, quantity: int) -> int:
        """Admin restock; returns the new stock level."""
        self.credit(product_id, quantity)
        return self.stock_of(product_id)

    def low_stock(self, threshold: int) -> list[Product]:
        """Active products whose stock is below *threshold*."""
        return [
            p
            for p in self._product_repo.list_all()
            if p.is_active and p.stock < threshold
        ]

    def _debit_failure_message(self, product_id: str, quantity: int) -> str:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            return f"Insufficient stock: product ID '{product_id}' does not exist"
        if not product.is_active:
            return f"Insufficient stock for {product.name}: product is no longer available"
        return (
            f"Insufficient stock for {product.name} "
            f"(requested {quantity}, available {product.stock})"
        )

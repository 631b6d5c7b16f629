"""Application service: Restock use case."""

from __future__ import annotations

from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import InventoryLedger


class RestockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, quantity: int) -> int:
        """Add *quantity* units to stock and return the new level."""
        ledger = InventoryLedger(self._product_repo)
        return ledger.restock(product_id, quantity)

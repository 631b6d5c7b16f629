"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import InventoryLedger


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    stock: int
    active: bool


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, low_stock_threshold: int | None = None) -> list[InventoryLineDTO]:
        """List stock levels; with a threshold, only active products below it."""
        if low_stock_threshold is not None:
            products = InventoryLedger(self._product_repo).low_stock(low_stock_threshold)
        else:
            products = self._product_repo.list_all()
        return [
            InventoryLineDTO(
                product_id=p.id,
                product_name=p.name,
                stock=p.stock,
                active=p.is_active,
            )
            for p in products
        ]

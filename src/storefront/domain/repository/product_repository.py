"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, active or not."""

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique product ID."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product.

        For a product that already exists the stored stock count is
        kept; stock only moves through ``decrement_stock`` and
        ``increment_stock``.
        """

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Atomically take *quantity* units out of stock.

        Applies only if the product exists, is active and has at least
        *quantity* units; the check and the write happen under one
        store-level lock. Returns whether the decrement was applied.
        """

    @abstractmethod
    def increment_stock(self, product_id: str, quantity: int) -> bool:
        """Atomically add *quantity* units. Returns False if no record exists."""

"""Application services: Update Product / Deactivate Product use cases."""

from __future__ import annotations

import logging

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        new_price: str | None = None,
        discount_price: str | None = None,
        clear_discount: bool = False,
    ) -> ProductDTO:
        """Update a product's price and/or discount price.

        This does NOT affect existing orders or cart lines; they
        captured a price snapshot. ValidateCart refreshes cart prices.
        """
        if new_price is None and discount_price is None and not clear_discount:
            raise ValidationError("Nothing to update")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        price = Money.of(new_price) if new_price is not None else product.price
        if discount_price is not None:
            discount = Money.of(discount_price)
        elif clear_discount:
            discount = None
        else:
            discount = product.discount_price
        product.set_pricing(price, discount)

        self._product_repo.save(product)
        logger.info("Updated product %s", product_id)
        return product_to_dto(product)


class DeactivateProductHandler:
    """Soft delete: the product disappears from sale but keeps its record."""

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        product.deactivate()
        self._product_repo.save(product)
        logger.info("Deactivated product %s", product_id)

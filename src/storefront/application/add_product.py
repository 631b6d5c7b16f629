"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        discount_price: str | None = None,
        image_url: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog with an initial stock level."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        for existing in self._product_repo.list_all():
            if existing.is_active and existing.name.lower() == name.strip().lower():
                raise ValidationError(f"Product '{name}' already exists")

        product = Product(
            id=self._product_repo.next_id(),
            name=name.strip(),
            price=Money.of(price),
            stock=stock,
            image_url=image_url,
        )
        if product.price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        if discount_price is not None:
            product.set_discount_price(Money.of(discount_price))

        self._product_repo.save(product)
        logger.info("Added product %s '%s' with stock %d", product.id, product.name, stock)
        return product_to_dto(product)

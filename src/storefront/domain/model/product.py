"""Product aggregate (inventory-relevant view).

Products live independently of carts and orders. They have their own
lifecycle: prices change, products are retired from the catalog.
Retirement is a soft delete: the record stays so stock can still be
credited back by cancelled orders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    ``stock`` is owned by the inventory ledger. Repositories ignore it
    when saving an existing product, so a price update can never clobber
    a concurrent debit.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    discount_price: Money | None = None
    is_active: bool = True
    image_url: str | None = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError(f"Stock cannot be negative, got {self.stock}")

    @property
    def effective_price(self) -> Money:
        """Price a customer pays today: the discount price if one is set."""
        if self.discount_price is not None:
            return self.discount_price
        return self.price

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.set_pricing(new_price, self.discount_price)

    def set_discount_price(self, discount_price: Money | None) -> None:
        self.set_pricing(self.price, discount_price)

    def set_pricing(self, price: Money, discount_price: Money | None) -> None:
        """Replace price and discount together; the pair is validated as a whole."""
        if price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        if discount_price is not None:
            if discount_price.amount <= 0:
                raise ValidationError("Discount price must be greater than zero")
            if discount_price >= price:
                raise ValidationError("Discount price must be lower than the price")
        self.price = price
        self.discount_price = discount_price
        self._touch()

    def deactivate(self) -> None:
        self.is_active = False
        self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

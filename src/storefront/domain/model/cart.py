"""Cart aggregate — a user's mutable pre-order collection of product lines.

Totals are never stored or set by callers; they are derived from the
lines and the discount every time they are read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from storefront.domain.exceptions import ItemNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
TAX_RATE = Decimal("0.10")
FREE_SHIPPING_THRESHOLD = Money(Decimal("50.00"))
FLAT_SHIPPING_FEE = Money(Decimal("10.00"))


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CartItem:
    """A cart line with the product details snapshotted at add-time."""

    product_id: str
    product_name: str
    unit_price: Money
    quantity: Quantity
    product_image: str | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class CartTotals:
    subtotal: Money
    tax: Money
    shipping: Money
    discount: Money
    total: Money


def compute_totals(items: list[CartItem], discount: Money) -> CartTotals:
    """Derive cart totals from its lines and discount.

    A pure function: the same lines and discount always give the same
    result. An empty cart has every total at zero.
    """
    if not items:
        zero = Money.zero()
        return CartTotals(zero, zero, zero, discount, zero)

    subtotal = Money.zero()
    for item in items:
        subtotal = subtotal + item.line_total

    tax = subtotal.apply_rate(TAX_RATE)
    shipping = Money.zero() if subtotal >= FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE
    total = (subtotal + tax + shipping).minus_floor_zero(discount)
    return CartTotals(
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        discount=discount,
        total=total,
    )


@dataclass
class Cart:
    """Aggregate root for a user's cart.

    Invariant: at most one CartItem per product id. Adding a product
    that is already present merges the quantities.

    Stock checks are the caller's job (they need the inventory ledger);
    the cart only guards its own shape.
    """

    user_id: str
    items: list[CartItem] = field(default_factory=list)
    discount: Money = field(default_factory=Money.zero)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product: Product, quantity: Quantity) -> CartItem:
        """Add *quantity* of *product*, merging with an existing line."""
        existing = self.find_item(product.id)
        if existing is not None:
            existing.quantity = Quantity(existing.quantity.value + quantity.value)
            self._touch()
            return existing

        item = CartItem(
            product_id=product.id,
            product_name=product.name,
            unit_price=product.effective_price,  # <-- price snapshot
            quantity=quantity,
            product_image=product.image_url,
        )
        self.items.append(item)
        self._touch()
        return item

    def update_quantity(self, product_id: str, quantity: Quantity) -> None:
        self._require_item(product_id).quantity = quantity
        self._touch()

    def reprice(self, product_id: str, unit_price: Money) -> None:
        self._require_item(product_id).unit_price = unit_price
        self._touch()

    def remove_item(self, product_id: str) -> None:
        item = self._require_item(product_id)
        self.items.remove(item)
        self._touch()

    def clear(self) -> None:
        """Empty the cart and reset the discount. Safe to call repeatedly."""
        self.items.clear()
        self.discount = Money.zero()
        self._touch()

    def apply_discount(self, amount: Money) -> None:
        if not self.items:
            raise ValidationError("Cannot apply a discount to an empty cart")
        self.discount = amount
        self._touch()

    def remove_discount(self) -> None:
        self.discount = Money.zero()
        self._touch()

    # --- Queries --------------------------------------------------------------

    def find_item(self, product_id: str) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def quantity_of(self, product_id: str) -> int:
        item = self.find_item(product_id)
        return item.quantity.value if item is not None else 0

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def totals(self) -> CartTotals:
        return compute_totals(self.items, self.discount)

    # --- Internal helpers -----------------------------------------------------

    def _require_item(self, product_id: str) -> CartItem:
        item = self.find_item(product_id)
        if item is None:
            raise ItemNotFoundError(f"Product ID '{product_id}' is not in the cart")
        return item

    def _touch(self) -> None:
        self.updated_at = _now()

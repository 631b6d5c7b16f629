"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items. The item list
and the money amounts are fixed when the order is created at checkout;
afterwards only the status, payment status and shipping details move.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import (
    InvalidStateError,
    InvalidTransitionError,
    ValidationError,
)
from storefront.domain.model.cart import CartItem, CartTotals
from storefront.domain.model.value_objects import Address, Money, PaymentMethod, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

CANCELLABLE_STATUSES = frozenset(
    {OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PROCESSING}
)


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price snapshot of a cart line at checkout time."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    product_image: str | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @staticmethod
    def from_cart_item(item: CartItem) -> OrderLineItem:
        return OrderLineItem(
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            product_image=item.product_image,
        )


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    order_number: str
    user_id: str
    items: tuple[OrderLineItem, ...]
    subtotal: Money
    tax: Money
    shipping: Money
    discount: Money
    total: Money
    shipping_address: Address
    payment_method: PaymentMethod
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    tracking_number: str | None = None
    carrier: str | None = None
    cancellation_reason: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        user_id: str,
        items: list[CartItem],
        totals: CartTotals,
        shipping_address: Address,
        payment_method: PaymentMethod,
    ) -> Order:
        """Create a new PENDING order from a snapshot of cart lines."""
        if not user_id or not user_id.strip():
            raise ValidationError("User ID is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        return Order(
            id=None,
            order_number=order_number,
            user_id=user_id,
            items=tuple(OrderLineItem.from_cart_item(item) for item in items),
            subtotal=totals.subtotal,
            tax=totals.tax,
            shipping=totals.shipping,
            discount=totals.discount,
            total=totals.total,
            shipping_address=shipping_address,
            payment_method=payment_method,
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(self, new_status: OrderStatus) -> None:
        """Move to *new_status* if the transition table allows it.

        Completing an order also settles its payment.
        """
        if not can_transition(self.status, new_status):
            raise InvalidTransitionError(
                f"Invalid status transition from {self.status.value} "
                f"to {new_status.value}"
            )
        self.status = new_status
        now = _now()
        if new_status == OrderStatus.SHIPPED:
            self.shipped_at = now
        elif new_status == OrderStatus.DELIVERED:
            self.delivered_at = now
        elif new_status == OrderStatus.CANCELLED:
            self.cancelled_at = now
        elif new_status == OrderStatus.COMPLETED:
            self.payment_status = PaymentStatus.COMPLETED
        self.updated_at = now

    def set_payment_status(self, payment_status: PaymentStatus) -> None:
        """Record a payment outcome.

        A completed payment confirms a PENDING order; no other payment
        change touches the order status.
        """
        self.payment_status = payment_status
        if payment_status == PaymentStatus.COMPLETED and self.status == OrderStatus.PENDING:
            self.status = OrderStatus.CONFIRMED
        self.updated_at = _now()

    def add_tracking_info(self, tracking_number: str, carrier: str) -> None:
        if self.status != OrderStatus.SHIPPED:
            raise InvalidStateError(
                f"Cannot add tracking info for order in status {self.status.value}"
            )
        if not tracking_number or not tracking_number.strip():
            raise ValidationError("Tracking number is required")
        self.tracking_number = tracking_number.strip()
        self.carrier = carrier.strip() if carrier else None
        self.updated_at = _now()

    def cancel(self, reason: str | None = None) -> None:
        """Transition PENDING|CONFIRMED|PROCESSING -> CANCELLED.

        Crediting stock back is the caller's job (the inventory ledger
        lives outside the aggregate).
        """
        if not self.can_cancel:
            raise InvalidStateError(
                f"Order cannot be cancelled in status {self.status.value}"
            )
        self.transition_to(OrderStatus.CANCELLED)
        self.cancellation_reason = reason

    # --- Computed properties --------------------------------------------------

    @property
    def can_cancel(self) -> bool:
        return self.status in CANCELLABLE_STATUSES

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self.status]

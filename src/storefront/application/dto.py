"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. They are frozen, so a
cached DTO can be handed out to several callers safely.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class CartItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    user_id: str
    items: tuple[CartItemDTO, ...]
    item_count: int
    subtotal: str
    tax: str
    shipping: str
    discount: str
    total: str


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    user_id: str
    status: str
    payment_status: str
    payment_method: str
    items: tuple[OrderLineItemDTO, ...]
    subtotal: str
    tax: str
    shipping: str
    discount: str
    total: str
    shipping_address: str
    tracking_number: str | None
    carrier: str | None
    cancellation_reason: str | None
    created_at: str


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: str
    discount_price: str | None
    stock: int
    is_active: bool


# --- Mapping ------------------------------------------------------------------


def empty_cart_dto(user_id: str) -> CartDTO:
    return cart_to_dto(Cart(user_id=user_id))


def cart_to_dto(cart: Cart) -> CartDTO:
    totals = cart.totals
    return CartDTO(
        user_id=cart.user_id,
        items=tuple(
            CartItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in cart.items
        ),
        item_count=cart.item_count,
        subtotal=str(totals.subtotal),
        tax=str(totals.tax),
        shipping=str(totals.shipping),
        discount=str(totals.discount),
        total=str(totals.total),
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        user_id=order.user_id,
        status=order.status.value,
        payment_status=order.payment_status.value,
        payment_method=order.payment_method.value,
        items=tuple(
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ),
        subtotal=str(order.subtotal),
        tax=str(order.tax),
        shipping=str(order.shipping),
        discount=str(order.discount),
        total=str(order.total),
        shipping_address=str(order.shipping_address),
        tracking_number=order.tracking_number,
        carrier=order.carrier,
        cancellation_reason=order.cancellation_reason,
        created_at=order.created_at.strftime(_TIMESTAMP_FORMAT),
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        price=str(product.price),
        discount_price=str(product.discount_price) if product.discount_price else None,
        stock=product.stock,
        is_active=product.is_active,
    )

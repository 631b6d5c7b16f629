"""CLI commands for checkout and the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.add_tracking_info import AddTrackingInfoHandler
from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import OrderDTO
from storefront.application.show_order import (
    ListOrdersHandler,
    ListUserOrdersHandler,
    ShowOrderByNumberHandler,
    ShowOrderHandler,
)
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_payment_status import UpdatePaymentStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.domain.model.value_objects import Address, PaymentMethod
from storefront.infrastructure.bootstrap import (
    cache,
    cart_repository,
    order_notifications,
    order_repository,
    product_repository,
)

order_id_option = click.option("--id", "order_id", required=True, type=int, help="Order ID.")


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id} {dto.order_number}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Payment:  {dto.payment_method}")
    if dto.tracking_number:
        click.echo(f"Tracking: {dto.tracking_number} ({dto.carrier or 'unknown carrier'})")
    if dto.cancellation_reason:
        click.echo(f"Cancelled: {dto.cancellation_reason}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    for label, value in (
        ("Subtotal", dto.subtotal),
        ("Tax", dto.tax),
        ("Shipping", dto.shipping),
        ("Discount", dto.discount),
        ("Order Total", dto.total),
    ):
        click.echo(f"  {label:<27} {value:>20}")


def _choice_of(enum_cls) -> click.Choice:
    return click.Choice([member.value for member in enum_cls], case_sensitive=False)


@click.command("checkout")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--name", "full_name", required=True, help="Recipient full name.")
@click.option("--street", required=True)
@click.option("--line2", default=None)
@click.option("--city", required=True)
@click.option("--state", required=True)
@click.option("--postal-code", required=True)
@click.option("--country", required=True)
@click.option("--phone", default=None)
@click.option("--payment", "payment_method", required=True, type=_choice_of(PaymentMethod))
def order_checkout(
    user_id: str,
    full_name: str,
    street: str,
    line2: str | None,
    city: str,
    state: str,
    postal_code: str,
    country: str,
    phone: str | None,
    payment_method: str,
) -> None:
    """Turn the user's cart into an order (debits stock, empties the cart)."""
    handler = CheckoutHandler(
        cart_repo=cart_repository(),
        order_repo=order_repository(),
        product_repo=product_repository(),
        notifications=order_notifications(),
        cache=cache(),
    )

    try:
        address = Address(
            full_name=full_name,
            street=street,
            line2=line2,
            city=city,
            state=state,
            postal_code=postal_code,
            country=country,
            phone=phone,
        )
        dto = handler.handle(
            user_id=user_id,
            shipping_address=address,
            payment_method=PaymentMethod.parse(payment_method),
        )
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Order #{dto.id} created  (number={dto.order_number}, status={dto.status})")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", default=None, type=int, help="Order ID to display.")
@click.option("--number", "order_number", default=None, help="Order number to display.")
def order_show(order_id: int | None, order_number: str | None) -> None:
    """Show details of an existing order."""
    if (order_id is None) == (order_number is None):
        raise click.UsageError("Pass exactly one of --id or --number")

    try:
        if order_id is not None:
            dto = ShowOrderHandler(order_repo=order_repository(), cache=cache()).handle(order_id)
        else:
            dto = ShowOrderByNumberHandler(order_repo=order_repository()).handle(order_number)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only this user's orders.")
@click.option("--status", default=None, type=_choice_of(OrderStatus), help="Only orders in this status.")
@click.option("--payment", "payment_status", default=None, type=_choice_of(PaymentStatus), help="Only orders with this payment status.")
def order_list(user_id: str | None, status: str | None, payment_status: str | None) -> None:
    """List orders, newest first (all orders unless filtered)."""
    if user_id is not None and (status or payment_status):
        raise click.UsageError("--user cannot be combined with --status or --payment")

    if user_id is not None:
        orders = ListUserOrdersHandler(order_repo=order_repository(), cache=cache()).handle(user_id)
    else:
        orders = ListOrdersHandler(order_repo=order_repository()).handle(
            status=OrderStatus(status.upper()) if status else None,
            payment_status=PaymentStatus(payment_status.upper()) if payment_status else None,
        )

    if not orders:
        click.echo(f"No orders for {user_id}." if user_id else "No orders found.")
        return

    click.echo(f"{'ID':<6} {'Number':<28} {'Status':<11} {'Payment':<10} {'Total':>10}")
    click.echo("-" * 69)
    for dto in orders:
        click.echo(
            f"{dto.id:<6} {dto.order_number:<28} {dto.status:<11} {dto.payment_status:<10} {dto.total:>10}"
        )


@click.command("status")
@order_id_option
@click.option("--to", "new_status", required=True, type=_choice_of(OrderStatus), help="Target status.")
def order_status(order_id: int, new_status: str) -> None:
    """Move an order to a new status."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(),
        notifications=order_notifications(),
        cache=cache(),
    )

    try:
        dto = handler.handle(order_id, OrderStatus(new_status.upper()))
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Order #{order_id} is now {dto.status}.")


@click.command("payment")
@order_id_option
@click.option("--status", "payment_status", required=True, type=_choice_of(PaymentStatus))
def order_payment(order_id: int, payment_status: str) -> None:
    """Record a payment outcome (COMPLETED confirms a pending order)."""
    handler = UpdatePaymentStatusHandler(
        order_repo=order_repository(),
        notifications=order_notifications(),
        cache=cache(),
    )

    try:
        dto = handler.handle(order_id, PaymentStatus(payment_status.upper()))
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Order #{order_id}: payment {dto.payment_status}, status {dto.status}.")


@click.command("track")
@order_id_option
@click.option("--tracking-number", required=True)
@click.option("--carrier", required=True)
def order_track(order_id: int, tracking_number: str, carrier: str) -> None:
    """Attach tracking info to a shipped order."""
    handler = AddTrackingInfoHandler(
        order_repo=order_repository(),
        notifications=order_notifications(),
        cache=cache(),
    )

    try:
        handler.handle(order_id, tracking_number, carrier)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Order #{order_id} tracking set to {tracking_number} ({carrier}).")


@click.command("cancel")
@order_id_option
@click.option("--reason", default=None, help="Why the order is cancelled.")
def order_cancel(order_id: int, reason: str | None) -> None:
    """Cancel an order and return its items to stock."""
    handler = CancelOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        notifications=order_notifications(),
        cache=cache(),
    )

    try:
        handler.handle(order_id, reason)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Order #{order_id} cancelled.")

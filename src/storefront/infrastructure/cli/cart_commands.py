"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import click

from storefront.application.abandoned_carts import (
    CleanupExpiredCartsHandler,
    ListAbandonedCartsHandler,
)
from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.cart_discount import ApplyDiscountHandler, RemoveDiscountHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.dto import CartDTO
from storefront.application.remove_cart_item import RemoveCartItemHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.application.validate_cart import ValidateCartHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import cache, cart_repository, product_repository

user_option = click.option("--user", "user_id", required=True, help="User ID owning the cart.")


def _display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying a cart."""
    if not dto.items:
        click.echo(f"Cart of {dto.user_id} is empty.")
        return

    click.echo(f"Cart of {dto.user_id}  ({dto.item_count} item(s))")
    click.echo()
    click.echo(f"  {'ID':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*54}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<6} {item.product_name:<20} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*54}")
    for label, value in (
        ("Subtotal", dto.subtotal),
        ("Tax", dto.tax),
        ("Shipping", dto.shipping),
        ("Discount", dto.discount),
        ("Total", dto.total),
    ):
        click.echo(f"  {label:<34} {value:>20}")


@click.command("add")
@user_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, type=int, help="Units to add.")
def cart_add(user_id: str, product_id: str, quantity: int) -> None:
    """Add a product to the cart (merges with an existing line)."""
    handler = AddToCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        cache=cache(),
    )

    try:
        dto = handler.handle(user_id=user_id, product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    _display_cart(dto)


@click.command("update")
@user_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (must be positive).")
def cart_update(user_id: str, product_id: str, quantity: int) -> None:
    """Set the quantity of a cart line."""
    handler = UpdateCartItemHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        cache=cache(),
    )

    try:
        dto = handler.handle(user_id=user_id, product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    _display_cart(dto)


@click.command("remove")
@user_option
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_remove(user_id: str, product_id: str) -> None:
    """Remove a line from the cart."""
    handler = RemoveCartItemHandler(cart_repo=cart_repository(), cache=cache())

    try:
        dto = handler.handle(user_id=user_id, product_id=product_id)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    _display_cart(dto)


@click.command("clear")
@user_option
def cart_clear(user_id: str) -> None:
    """Empty the cart."""
    handler = ClearCartHandler(cart_repo=cart_repository(), cache=cache())
    handler.handle(user_id)
    click.echo(f"Cart of {user_id} cleared.")


@click.command("show")
@user_option
def cart_show(user_id: str) -> None:
    """Show the cart and its totals."""
    handler = ShowCartHandler(cart_repo=cart_repository(), cache=cache())
    _display_cart(handler.handle(user_id))


@click.command("validate")
@user_option
def cart_validate(user_id: str) -> None:
    """Re-check the cart against current prices and stock."""
    handler = ValidateCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        cache=cache(),
    )
    dto, modified = handler.handle(user_id)
    if modified:
        click.echo("Cart was adjusted to current prices and stock.")
    else:
        click.echo("Cart is up to date.")
    _display_cart(dto)


@click.command("discount")
@user_option
@click.option("--amount", required=True, help="Discount amount granted by a coupon.")
def cart_discount(user_id: str, amount: str) -> None:
    """Apply a coupon discount to the cart."""
    handler = ApplyDiscountHandler(cart_repo=cart_repository(), cache=cache())

    try:
        dto = handler.handle(user_id=user_id, amount=amount)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    _display_cart(dto)


@click.command("undiscount")
@user_option
def cart_undiscount(user_id: str) -> None:
    """Remove the coupon discount from the cart."""
    handler = RemoveDiscountHandler(cart_repo=cart_repository(), cache=cache())

    try:
        dto = handler.handle(user_id=user_id)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    _display_cart(dto)


days_option = click.option(
    "--days", required=True, type=click.IntRange(min=0), help="Days since the cart was last updated."
)


@click.command("abandoned")
@days_option
def cart_abandoned(days: int) -> None:
    """List carts with items that nobody has touched for --days days."""
    carts = ListAbandonedCartsHandler(cart_repo=cart_repository()).handle(days)

    if not carts:
        click.echo("No abandoned carts.")
        return

    click.echo(f"{'User':<20} {'Items':>6} {'Total':>10}")
    click.echo("-" * 38)
    for dto in carts:
        click.echo(f"{dto.user_id:<20} {dto.item_count:>6} {dto.total:>10}")


@click.command("cleanup")
@days_option
def cart_cleanup(days: int) -> None:
    """Empty every cart idle for more than --days days."""
    handler = CleanupExpiredCartsHandler(cart_repo=cart_repository(), cache=cache())

    try:
        cleared = handler.handle(days)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Cleared {cleared} abandoned cart(s).")

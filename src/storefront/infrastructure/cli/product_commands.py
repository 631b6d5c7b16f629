"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.update_product import (
    DeactivateProductHandler,
    UpdateProductHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, type=click.IntRange(min=0), help="Initial stock.")
@click.option("--discount-price", default=None, help="Optional discounted price.")
@click.option("--image", "image_url", default=None, help="Image URL.")
def product_add(
    name: str,
    price: str,
    stock: int,
    discount_price: str | None,
    image_url: str | None,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(
            name=name,
            price=price,
            stock=stock,
            discount_price=discount_price,
            image_url=image_url,
        )
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Product #{dto.id} '{dto.name}' added at {dto.price} (stock {dto.stock})")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    repo = product_repository()
    products = repo.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Sale':>10} {'Stock':>6}  Status")
    click.echo("-" * 64)
    for p in products:
        sale = str(p.discount_price) if p.discount_price else "-"
        status = "active" if p.is_active else "inactive"
        click.echo(
            f"{p.id:<6} {p.name:<20} {str(p.price):>10} {sale:>10} {p.stock:>6}  {status}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--discount-price", default=None, help="New discounted price.")
@click.option("--clear-discount", is_flag=True, default=False, help="Remove the discount price.")
def product_update(
    product_id: str,
    price: str | None,
    discount_price: str | None,
    clear_discount: bool,
) -> None:
    """Update a product's price or discount price."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(
            product_id=product_id,
            new_price=price,
            discount_price=discount_price,
            clear_discount=clear_discount,
        )
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Product #{product_id} updated: price {dto.price}, sale {dto.discount_price or '-'}")


@click.command("deactivate")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_deactivate(product_id: str) -> None:
    """Take a product off sale (its record and stock are kept)."""
    handler = DeactivateProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Product #{product_id} deactivated.")

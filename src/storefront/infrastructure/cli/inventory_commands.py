"""CLI commands for inventory management."""

from __future__ import annotations

import click

from storefront.application.restock import RestockHandler
from storefront.application.show_inventory import ShowInventoryHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository


@click.command("restock")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to add to stock.")
def inventory_restock(product_id: str, quantity: int) -> None:
    """Add units to a product's stock."""
    handler = RestockHandler(product_repo=product_repository())

    try:
        new_level = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Stock for product #{product_id} is now {new_level}")


@click.command("show")
@click.option("--low-stock", "threshold", default=None, type=int, help="Only active products below this level.")
def inventory_show(threshold: int | None) -> None:
    """Show current stock levels."""
    handler = ShowInventoryHandler(product_repo=product_repository())
    lines = handler.handle(low_stock_threshold=threshold)

    if not lines:
        click.echo("No inventory records found.")
        return

    click.echo(f"{'ID':<6} {'Product':<20} {'Stock':>8}  Status")
    click.echo("-" * 46)
    for line in lines:
        status = "active" if line.active else "inactive"
        click.echo(f"{line.product_id:<6} {line.product_name:<20} {line.stock:>8}  {status}")

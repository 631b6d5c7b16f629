import click

from storefront.infrastructure.cli.cart_commands import (
    cart_abandoned,
    cart_add,
    cart_cleanup,
    cart_clear,
    cart_discount,
    cart_remove,
    cart_show,
    cart_undiscount,
    cart_update,
    cart_validate,
)
from storefront.infrastructure.cli.inventory_commands import (
    inventory_restock,
    inventory_show,
)
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_checkout,
    order_list,
    order_payment,
    order_show,
    order_status,
    order_track,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_deactivate,
    product_list,
    product_update,
)
from storefront.infrastructure.cli.user_commands import user_register
from storefront.infrastructure.config import load_settings
from storefront.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Log level (default: STOREFRONT_LOG_LEVEL or WARNING).")
def cli(log_level: str | None) -> None:
    """Storefront — cart, checkout and order lifecycle"""
    try:
        configure_logging(log_level or load_settings().log_level)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--log-level")


@cli.group()
def product() -> None:
    """Manage the catalog."""


@cli.group()
def inventory() -> None:
    """Manage stock levels."""


@cli.group()
def cart() -> None:
    """Manage a user's cart."""


@cli.group()
def order() -> None:
    """Check out and manage orders."""


@cli.group()
def user() -> None:
    """Manage notification contacts."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_deactivate)
product.add_command(product_list)
product.add_command(product_update)
inventory.add_command(inventory_restock)
inventory.add_command(inventory_show)
cart.add_command(cart_abandoned)
cart.add_command(cart_add)
cart.add_command(cart_cleanup)
cart.add_command(cart_clear)
cart.add_command(cart_discount)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_undiscount)
cart.add_command(cart_update)
cart.add_command(cart_validate)
order.add_command(order_cancel)
order.add_command(order_checkout)
order.add_command(order_list)
order.add_command(order_payment)
order.add_command(order_show)
order.add_command(order_status)
order.add_command(order_track)
user.add_command(user_register)

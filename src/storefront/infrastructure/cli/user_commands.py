"""CLI commands for the user contact directory."""

from __future__ import annotations

import click

from storefront.infrastructure.bootstrap import user_directory


@click.command("register")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--email", required=True, help="Email address for order notifications.")
def user_register(user_id: str, email: str) -> None:
    """Record the email address order notifications go to."""
    if "@" not in email:
        raise click.BadParameter(f"'{email}' is not an email address", param_hint="--email")
    user_directory().register(user_id, email)
    click.echo(f"User '{user_id}' will be notified at {email}")

"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import click

from marketplace.application.add_to_cart import AddToCartHandler
from marketplace.application.clear_cart import ClearCartHandler
from marketplace.application.show_cart import ShowCartHandler
from marketplace.application.update_cart_item import (
    RemoveCartItemHandler,
    UpdateCartItemHandler,
)
from marketplace.domain.exceptions import DomainException
from marketplace.infrastructure.bootstrap import (
    cart_repository,
    catalog_repository,
    fee_schedule,
)
from marketplace.infrastructure.cli.display import display_cart


@click.command("add")
@click.option("--item", "item_id", required=True, help="Catalog item ID.")
@click.option("--qty", "quantity", default=1, show_default=True, type=int, help="How many to add.")
def cart_add(item_id: str, quantity: int) -> None:
    """Add a catalog item to the cart."""
    handler = AddToCartHandler(
        cart_repo=cart_repository(),
        catalog_repo=catalog_repository(),
        fees=fee_schedule(),
    )

    try:
        dto = handler.handle(item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {quantity} x '{item_id}' to cart.")
    display_cart(dto)


@click.command("update")
@click.option("--item", "item_id", required=True, help="Catalog item ID.")
@click.option("--qty", "quantity", required=True, type=int, help="New quantity (0 removes).")
def cart_update(item_id: str, quantity: int) -> None:
    """Set the quantity of a cart line."""
    handler = UpdateCartItemHandler(cart_repo=cart_repository(), fees=fee_schedule())

    try:
        dto = handler.handle(item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("remove")
@click.option("--item", "item_id", required=True, help="Catalog item ID.")
def cart_remove(item_id: str) -> None:
    """Remove a line from the cart."""
    handler = RemoveCartItemHandler(cart_repo=cart_repository(), fees=fee_schedule())
    display_cart(handler.handle(item_id))


@click.command("show")
def cart_show() -> None:
    """Show the cart grouped by vendor, with fees."""
    handler = ShowCartHandler(cart_repo=cart_repository(), fees=fee_schedule())

    try:
        dto = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("clear")
def cart_clear() -> None:
    """Empty the cart."""
    ClearCartHandler(cart_repo=cart_repository()).handle()
    click.echo("Cart cleared.")

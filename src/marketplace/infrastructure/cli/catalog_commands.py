"""CLI commands for the CatalogItem aggregate."""

from __future__ import annotations

import click

from marketplace.application.add_catalog_item import AddCatalogItemHandler
from marketplace.application.remove_catalog_item import RemoveCatalogItemHandler
from marketplace.application.update_catalog_price import UpdateCatalogPriceHandler
from marketplace.domain.exceptions import DomainException
from marketplace.domain.model.value_objects import EntityType
from marketplace.infrastructure.bootstrap import catalog_repository, settings


@click.command("add")
@click.option("--id", "item_id", required=True, help="Catalog item ID (unique across vendors).")
@click.option("--name", required=True, help="Item name.")
@click.option("--price", required=True, help="Price (e.g. 150.00).")
@click.option("--vendor", "vendor_id", required=True, help="Vendor ID.")
@click.option("--vendor-name", default=None, help="Vendor display name.")
@click.option(
    "--type",
    "entity_type",
    type=click.Choice([t.value for t in EntityType]),
    default=EntityType.RESTAURANT.value,
    show_default=True,
    help="Kind of vendor.",
)
@click.option("--description", default=None, help="Short description.")
def catalog_add(
    item_id: str,
    name: str,
    price: str,
    vendor_id: str,
    vendor_name: str | None,
    entity_type: str,
    description: str | None,
) -> None:
    """Add an item to a vendor's catalog."""
    handler = AddCatalogItemHandler(
        catalog_repo=catalog_repository(), currency=settings().currency
    )

    try:
        item = handler.handle(
            item_id=item_id,
            name=name,
            price=price,
            vendor_id=vendor_id,
            vendor_name=vendor_name or vendor_id,
            entity_type=entity_type,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Catalog item '{item.id}' ({item.name}) added for {item.vendor_name} at {item.price}")


@click.command("list")
@click.option("--vendor", "vendor_id", default=None, help="Only this vendor's items.")
def catalog_list(vendor_id: str | None) -> None:
    """List catalog items."""
    repo = catalog_repository()
    items = repo.list_for_vendor(vendor_id) if vendor_id else repo.list_all()

    if not items:
        click.echo("No catalog items found.")
        return

    click.echo(f"{'ID':<10} {'Name':<24} {'Vendor':<12} {'Type':<10} {'Price':>12}")
    click.echo("-" * 72)
    for i in items:
        click.echo(
            f"{i.id:<10} {i.name:<24} {i.vendor_id:<12} {i.entity_type.value:<10} {str(i.price):>12}"
        )


@click.command("update")
@click.option("--id", "item_id", required=True, help="Catalog item ID.")
@click.option("--price", required=True, help="New price (e.g. 175.00).")
def catalog_update(item_id: str, price: str) -> None:
    """Update a catalog item's price."""
    handler = UpdateCatalogPriceHandler(catalog_repo=catalog_repository())

    try:
        handler.handle(item_id=item_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Catalog item '{item_id}' price updated to {price}")


@click.command("remove")
@click.option("--id", "item_id", required=True, help="Catalog item ID.")
def catalog_remove(item_id: str) -> None:
    """Remove an item from its vendor's catalog."""
    handler = RemoveCatalogItemHandler(catalog_repo=catalog_repository())

    try:
        handler.handle(item_id=item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Catalog item '{item_id}' removed")

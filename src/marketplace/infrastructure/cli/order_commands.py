"""CLI commands for the Order aggregate."""

from __future__ import annotations

import asyncio

import click

from marketplace.application.advance_order import AdvanceOrderHandler
from marketplace.application.cancel_order import CancelOrderHandler
from marketplace.application.list_orders import (
    ListCustomerOrdersHandler,
    ListVendorOrdersHandler,
)
from marketplace.application.show_order import ShowOrderHandler
from marketplace.application.update_order_status import UpdateOrderStatusHandler
from marketplace.domain.exceptions import DomainException, StaleStateError
from marketplace.domain.model.status import ActorRole, OrderStatus
from marketplace.domain.service.order_query import ALL
from marketplace.infrastructure.bootstrap import customer_id, order_backend
from marketplace.infrastructure.cli.display import (
    display_order,
    display_order_row,
    display_vendor_stats,
)

_ROLES = click.Choice([r.value for r in ActorRole])
_STATUS_VALUES = [s.value for s in OrderStatus] + ["PROCESSING"]
_STATUSES = click.Choice(_STATUS_VALUES, case_sensitive=False)


def _fail(exc: DomainException) -> click.ClickException:
    if isinstance(exc, StaleStateError):
        return click.ClickException(f"{exc}. Re-check the order and try again.")
    return click.ClickException(str(exc))


@click.command("list")
@click.option("--vendor", "vendor_id", default=None, help="List a vendor's orders instead of your own.")
@click.option(
    "--status",
    type=click.Choice([ALL] + _STATUS_VALUES, case_sensitive=False),
    default=ALL,
    show_default=True,
    help="Vendor view: only orders in this status.",
)
def order_list(vendor_id: str | None, status: str) -> None:
    """List live and past orders, or a vendor's dashboard and orders by status."""
    try:
        if vendor_id:
            handler = ListVendorOrdersHandler(order_backend())
            dto = asyncio.run(handler.handle(vendor_id, status))
        else:
            handler = ListCustomerOrdersHandler(order_backend(), customer_id())
            dto = asyncio.run(handler.handle())
    except DomainException as exc:
        raise _fail(exc)

    if vendor_id:
        counts = "  ".join(f"{s.lower()}({n})" for s, n in dto.counts.items())
        click.echo(counts)
        click.echo()
        display_vendor_stats(dto.stats)
        sections = [(f"Orders ({status.upper()})", dto.orders)]
    else:
        sections = [("Live Orders", dto.live), ("Past Orders", dto.past)]

    for title, orders in sections:
        click.echo()
        click.echo(f"{title} ({len(orders)})")
        click.echo("-" * 64)
        for o in orders:
            display_order_row(o)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_backend())

    try:
        dto = asyncio.run(handler.handle(order_id))
    except DomainException as exc:
        raise _fail(exc)

    display_order(dto)


@click.command("advance")
@click.option("--id", "order_id", required=True, help="Order ID to move forward.")
@click.option("--role", type=_ROLES, required=True, help="Who is acting.")
def order_advance(order_id: str, role: str) -> None:
    """Move an order to its next status (vendor or driver)."""
    handler = AdvanceOrderHandler(order_backend())

    try:
        dto = asyncio.run(handler.handle(order_id, ActorRole(role)))
    except DomainException as exc:
        raise _fail(exc)

    click.echo(f"Order #{dto.id} is now {dto.status}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.option("--role", type=_ROLES, default=ActorRole.CUSTOMER.value, show_default=True, help="Who is acting.")
@click.option("--reason", default=None, help="Why the order is cancelled.")
def order_cancel(order_id: str, role: str, reason: str | None) -> None:
    """Cancel an order before it is ready."""
    handler = CancelOrderHandler(order_backend())

    try:
        dto = asyncio.run(handler.handle(order_id, ActorRole(role), reason))
    except DomainException as exc:
        raise _fail(exc)

    click.echo(f"Order #{dto.id} cancelled.")


@click.command("set-status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--role", type=_ROLES, required=True, help="Who is acting.")
@click.option("--from", "source", type=_STATUSES, required=True, help="Status you expect the order to be in.")
@click.option("--to", "target", type=_STATUSES, required=True, help="Status to move to.")
def order_set_status(order_id: str, role: str, source: str, target: str) -> None:
    """Apply an explicit status change, failing if the order has moved on."""
    handler = UpdateOrderStatusHandler(order_backend())

    try:
        dto = asyncio.run(
            handler.handle(order_id, ActorRole(role), OrderStatus(source), OrderStatus(target))
        )
    except DomainException as exc:
        raise _fail(exc)

    click.echo(f"Order #{dto.id} is now {dto.status}.")

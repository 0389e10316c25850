"""CLI command for checkout."""

from __future__ import annotations

import asyncio

import click

from marketplace.application.checkout import PAYMENT_METHODS, CheckoutHandler
from marketplace.application.dto import CheckoutResult
from marketplace.domain.exceptions import DomainException, NetworkError
from marketplace.domain.model.checkout import CustomerInfo
from marketplace.infrastructure.bootstrap import (
    cart_repository,
    customer_id,
    fee_schedule,
    order_backend,
    profile_cache,
)


@click.command("checkout")
@click.option("--name", default=None, help="Customer name (defaults to the saved profile).")
@click.option("--phone", default=None, help="Contact phone (defaults to the saved profile).")
@click.option("--address", default=None, help="Delivery address (defaults to the saved profile).")
@click.option("--email", default=None, help="Email, remembered for next time.")
@click.option("--notes", default=None, help="Notes for the vendors.")
@click.option(
    "--payment",
    type=click.Choice(PAYMENT_METHODS),
    default="cash",
    show_default=True,
    help="Payment method label.",
)
@click.option(
    "--vendor",
    "vendor_ids",
    multiple=True,
    help="Only place orders for these vendors (retry after a partial failure).",
)
def checkout(
    name: str | None,
    phone: str | None,
    address: str | None,
    email: str | None,
    notes: str | None,
    payment: str,
    vendor_ids: tuple[str, ...],
) -> None:
    """Place one order per vendor in the cart."""
    handler = CheckoutHandler(
        cart_repo=cart_repository(),
        order_backend=order_backend(),
        profile_cache=profile_cache(),
        fees=fee_schedule(),
        customer_id=customer_id(),
    )

    saved = handler.prefill()
    info = CustomerInfo(
        customer_name=name if name is not None else saved.customer_name,
        customer_phone=phone if phone is not None else saved.customer_phone,
        delivery_address=address if address is not None else saved.delivery_address,
        email=email if email is not None else saved.email,
        notes=notes,
    )

    try:
        result = asyncio.run(
            handler.handle(info, payment, list(vendor_ids) if vendor_ids else None)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_result(result)
    if not result.is_complete:
        failed = " ".join(f"--vendor {v}" for v in result.failed_vendor_ids)
        raise click.ClickException(
            f"Some orders were not placed. Retry with: marketplace checkout {failed}"
        )


def _display_result(result: CheckoutResult) -> None:
    for outcome in result.outcomes:
        if outcome.succeeded:
            click.echo(
                f"  [ok]     {outcome.vendor_id:<12} order #{outcome.order.id} "
                f"({outcome.order.total})"
            )
        else:
            hint = "  (temporary, retry)" if outcome.retryable else ""
            click.echo(f"  [failed] {outcome.vendor_id:<12} {outcome.error}{hint}")

    if result.is_complete:
        count = len(result.outcomes)
        click.echo(
            f"Order{'s have' if count > 1 else ' has'} been placed successfully. "
            f"Total {result.grand_total}, paying by {result.payment_method}."
        )

"""Shared table formatting for CLI output."""

from __future__ import annotations

import click

from marketplace.application.dto import CartDTO, OrderDTO, VendorStatsDTO


def display_cart(dto: CartDTO) -> None:
    if not dto.items:
        click.echo("Your cart is empty.")
        return

    current_vendor = None
    click.echo(f"  {'Item':<24} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*56}")
    for line in dto.items:
        if line.vendor_id != current_vendor:
            current_vendor = line.vendor_id
            subtotal = dto.per_vendor_totals[line.vendor_id]
            click.echo(f"  [{line.vendor_name}] ({line.vendor_id})  subtotal {subtotal}")
        click.echo(
            f"  {line.name:<24} {line.quantity:>5} {line.unit_price:>12} {line.line_total:>12}"
        )
    click.echo(f"  {'-'*56}")
    click.echo(f"  {'Items':<31} {dto.item_count:>25}")
    click.echo(f"  {'Subtotal':<31} {dto.subtotal:>25}")
    click.echo(f"  {'Delivery Fee':<31} {dto.delivery_fee:>25}")
    click.echo(f"  {'Service Fee':<31} {dto.service_fee:>25}")
    click.echo(f"  {'Total':<31} {dto.grand_total:>25}")


def display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Vendor:   {dto.vendor_id}")
    click.echo(f"Customer: {dto.customer_name}  {dto.customer_phone}")
    click.echo(f"Deliver:  {dto.delivery_address}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.estimated_delivery_time:
        click.echo(f"ETA:      {dto.estimated_delivery_time}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    if dto.cancellation_reason:
        click.echo(f"Reason:   {dto.cancellation_reason}")
    click.echo()
    click.echo(f"  {'Item':<24} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*56}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<24} {item.quantity:>5} {item.unit_price:>12} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*56}")
    click.echo(f"  {'Order Total':<31} {dto.total:>25}")


def display_order_row(dto: OrderDTO) -> None:
    click.echo(
        f"{dto.id:<6} {dto.vendor_id:<12} {dto.status:<11} {dto.total:>12}  {dto.created_at}"
    )


def display_vendor_stats(stats: VendorStatsDTO) -> None:
    click.echo(f"  {'Revenue':<16} {stats.total_revenue:>12}   today {stats.today_revenue}")
    click.echo(f"  {'Orders':<16} {stats.total_orders:>12}   today {stats.today_orders}")
    click.echo(f"  {'Pending':<16} {stats.pending_orders:>12}")
    click.echo(f"  {'Completed':<16} {stats.completed_orders:>12}")
    click.echo(f"  {'Average order':<16} {stats.average_order_value:>12}")
    if stats.top_selling:
        click.echo("  Top sellers:")
        for seller in stats.top_selling:
            click.echo(f"    {seller.name:<24} {seller.sales:>5} sold {seller.revenue:>12}")

"""Domain service: Order Query.

Read-only views over a collection of orders for presentation. Input order
is preserved and nothing is mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.order import Order
from marketplace.domain.model.status import OrderStatus
from marketplace.domain.model.value_objects import DEFAULT_CURRENCY, Money

ALL = "ALL"

# Derived from the enum so the partition always covers every status.
LIVE_STATUSES = frozenset(s for s in OrderStatus if not s.is_terminal)
PAST_STATUSES = frozenset(s for s in OrderStatus if s.is_terminal)


@dataclass(frozen=True)
class OrderPhases:
    live: list[Order]
    past: list[Order]


def partition_by_phase(orders: Iterable[Order]) -> OrderPhases:
    """Split into live (in progress) and past (delivered or cancelled)."""
    live: list[Order] = []
    past: list[Order] = []
    for order in orders:
        (past if order.status in PAST_STATUSES else live).append(order)
    return OrderPhases(live=live, past=past)


def parse_status_filter(value: OrderStatus | str) -> OrderStatus | None:
    """Return the status to match, or None for ``ALL``."""
    if isinstance(value, OrderStatus):
        return value
    if value.strip().upper() == ALL:
        return None
    try:
        return OrderStatus(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown order status: {value!r}") from exc


def filter_by_status(orders: Iterable[Order], status: OrderStatus | str) -> list[Order]:
    wanted = parse_status_filter(status)
    if wanted is None:
        return list(orders)
    return [order for order in orders if order.status == wanted]


def count_by_status(orders: Iterable[Order]) -> dict[OrderStatus, int]:
    """Number of orders per status; every status is present, zero if unused."""
    counts = {status: 0 for status in OrderStatus}
    for order in orders:
        counts[order.status] += 1
    return counts


# --- Vendor dashboard ---------------------------------------------------------


@dataclass(frozen=True)
class TopSeller:
    catalog_item_id: str
    name: str
    sales: int
    revenue: Money


@dataclass(frozen=True)
class VendorStats:
    total_revenue: Money
    today_revenue: Money
    total_orders: int
    today_orders: int
    pending_orders: int
    completed_orders: int
    average_order_value: Money
    top_selling: list[TopSeller]
    recent_orders: list[Order]


def vendor_stats(
    orders: Iterable[Order],
    now: datetime,
    top_n: int = 5,
    recent_n: int = 5,
) -> VendorStats:
    """Dashboard figures for one vendor's orders.

    Revenue, average order value and top sellers count every order except
    cancelled ones. Order counts include all orders. "Today" is the UTC
    calendar day of ``now``.
    """
    orders = list(orders)
    currency = orders[0].currency if orders else DEFAULT_CURRENCY
    today = _utc_date(now)

    total = Money.zero(currency)
    today_total = Money.zero(currency)
    earning = 0
    sellers: dict[str, dict] = {}

    for order in orders:
        if order.status == OrderStatus.CANCELLED:
            continue
        earning += 1
        total = total + order.total_amount
        if _utc_date(order.created_at) == today:
            today_total = today_total + order.total_amount
        for item in order.items:
            entry = sellers.setdefault(
                item.catalog_item_id,
                {
                    "name": item.name or item.catalog_item_id,
                    "sales": 0,
                    "revenue": Money.zero(currency),
                },
            )
            entry["sales"] += item.quantity.value
            entry["revenue"] = entry["revenue"] + item.line_total

    if earning:
        average = (total.amount / earning).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )
    else:
        average = Decimal("0.00")

    top = sorted(
        (
            TopSeller(item_id, e["name"], e["sales"], e["revenue"])
            for item_id, e in sellers.items()
        ),
        key=lambda s: (-s.sales, -s.revenue.amount, s.catalog_item_id),
    )

    return VendorStats(
        total_revenue=total,
        today_revenue=today_total,
        total_orders=len(orders),
        today_orders=sum(1 for o in orders if _utc_date(o.created_at) == today),
        pending_orders=sum(1 for o in orders if o.status == OrderStatus.PENDING),
        completed_orders=sum(1 for o in orders if o.status == OrderStatus.DELIVERED),
        average_order_value=Money(average, currency),
        top_selling=top[:top_n],
        recent_orders=sorted(orders, key=lambda o: o.created_at, reverse=True)[:recent_n],
    )


def _utc_date(moment: datetime) -> date:
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(timezone.utc).date()

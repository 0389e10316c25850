"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from marketplace.domain.exceptions import DomainException, NetworkError
from marketplace.domain.model.cart import CartSnapshot
from marketplace.domain.model.checkout import CheckoutQuote
from marketplace.domain.model.order import Order
from marketplace.domain.service.order_query import VendorStats


@dataclass(frozen=True)
class CartLineDTO:
    item_id: str
    name: str
    vendor_id: str
    vendor_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "D50.00"
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    """Output: the cart as displayed before checkout."""

    items: list[CartLineDTO]
    per_vendor_totals: dict[str, str]
    item_count: int
    subtotal: str
    delivery_fee: str
    service_fee: str
    grand_total: str


@dataclass(frozen=True)
class OrderLineItemDTO:
    catalog_item_id: str
    name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    vendor_id: str
    customer_name: str
    customer_phone: str
    delivery_address: str
    status: str
    items: list[OrderLineItemDTO]
    total: str
    created_at: str
    notes: str | None = None
    estimated_delivery_time: str | None = None
    cancellation_reason: str | None = None


@dataclass(frozen=True)
class VendorOutcome:
    """How one vendor's order fared during checkout."""

    vendor_id: str
    order: OrderDTO | None = None
    error: str | None = None
    error_type: str | None = None
    retryable: bool = False

    @property
    def succeeded(self) -> bool:
        return self.order is not None

    @staticmethod
    def success(vendor_id: str, order: OrderDTO) -> VendorOutcome:
        return VendorOutcome(vendor_id=vendor_id, order=order)

    @staticmethod
    def failure(vendor_id: str, exc: DomainException) -> VendorOutcome:
        return VendorOutcome(
            vendor_id=vendor_id,
            error=str(exc),
            error_type=type(exc).__name__,
            retryable=isinstance(exc, NetworkError),
        )


@dataclass(frozen=True)
class CheckoutResult:
    outcomes: list[VendorOutcome]
    payment_method: str
    grand_total: str

    @property
    def is_complete(self) -> bool:
        return all(outcome.succeeded for outcome in self.outcomes)

    @property
    def succeeded_vendor_ids(self) -> list[str]:
        return [o.vendor_id for o in self.outcomes if o.succeeded]

    @property
    def failed_vendor_ids(self) -> list[str]:
        return [o.vendor_id for o in self.outcomes if not o.succeeded]

    @property
    def orders(self) -> list[OrderDTO]:
        return [o.order for o in self.outcomes if o.order is not None]


@dataclass(frozen=True)
class CustomerOrdersDTO:
    live: list[OrderDTO]
    past: list[OrderDTO]


@dataclass(frozen=True)
class TopSellerDTO:
    catalog_item_id: str
    name: str
    sales: int
    revenue: str


@dataclass(frozen=True)
class VendorStatsDTO:
    total_revenue: str
    today_revenue: str
    total_orders: int
    today_orders: int
    pending_orders: int
    completed_orders: int
    average_order_value: str
    top_selling: list[TopSellerDTO]
    recent_orders: list[OrderDTO]


@dataclass(frozen=True)
class VendorOrdersDTO:
    orders: list[OrderDTO]
    counts: dict[str, int] = field(default_factory=dict)
    stats: VendorStatsDTO | None = None


# --- Mapping ------------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        vendor_id=order.vendor_id,
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        delivery_address=order.delivery_address,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                catalog_item_id=item.catalog_item_id,
                name=item.name or item.catalog_item_id,
                quantity=item.quantity.value,
                unit_price=str(item.price_at_order_time),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        total=str(order.total_amount),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        notes=order.notes,
        estimated_delivery_time=(
            order.estimated_delivery_time.strftime("%Y-%m-%d %H:%M UTC")
            if order.estimated_delivery_time
            else None
        ),
        cancellation_reason=order.cancellation_reason,
    )


def stats_to_dto(stats: VendorStats) -> VendorStatsDTO:
    return VendorStatsDTO(
        total_revenue=str(stats.total_revenue),
        today_revenue=str(stats.today_revenue),
        total_orders=stats.total_orders,
        today_orders=stats.today_orders,
        pending_orders=stats.pending_orders,
        completed_orders=stats.completed_orders,
        average_order_value=str(stats.average_order_value),
        top_selling=[
            TopSellerDTO(
                catalog_item_id=s.catalog_item_id,
                name=s.name,
                sales=s.sales,
                revenue=str(s.revenue),
            )
            for s in stats.top_selling
        ],
        recent_orders=[order_to_dto(o) for o in stats.recent_orders],
    )


def cart_to_dto(snapshot: CartSnapshot, quote: CheckoutQuote) -> CartDTO:
    return CartDTO(
        items=[
            CartLineDTO(
                item_id=line.id,
                name=line.name,
                vendor_id=line.vendor_id,
                vendor_name=line.vendor_name,
                quantity=line.quantity,
                unit_price=str(line.price),
                line_total=str(line.line_total),
            )
            for line in snapshot.items
        ],
        per_vendor_totals={
            vendor_id: str(total)
            for vendor_id, total in snapshot.per_vendor_totals.items()
        },
        item_count=snapshot.item_count,
        subtotal=str(quote.subtotal),
        delivery_fee=str(quote.delivery_fee),
        service_fee=str(quote.service_fee),
        grand_total=str(quote.grand_total),
    )

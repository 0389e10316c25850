"""Order aggregate — one vendor's share of a checkout.

The Order is an aggregate root that owns its line items. Its status only
changes through ``apply_transition`` / ``cancel``, which check the
optimistic-concurrency precondition and the lifecycle rules before
touching any field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from marketplace.domain.exceptions import (
    InvalidTransitionError,
    StaleStateError,
    ValidationError,
)
from marketplace.domain.model.status import OrderStatus
from marketplace.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from marketplace.domain.service import order_lifecycle


@dataclass(frozen=True)
class OrderLineItem:
    """A catalog item as ordered, priced at order-creation time."""

    catalog_item_id: str
    quantity: Quantity
    price_at_order_time: Money  # locked at order-creation time
    name: str | None = None

    @property
    def line_total(self) -> Money:
        return self.price_at_order_time * self.quantity.value


@dataclass
class Order:
    """Aggregate root for vendor orders.

    Use the ``Order.create()`` factory for new orders. The ``__init__`` is
    intentionally simple so backends can reconstitute persisted orders
    without re-validating.
    """

    id: str | None
    vendor_id: str
    customer_id: str
    items: list[OrderLineItem]
    customer_name: str
    customer_phone: str
    delivery_address: str
    status: OrderStatus = OrderStatus.PENDING
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    estimated_delivery_time: datetime | None = None
    cancellation_reason: str | None = None
    currency: str = DEFAULT_CURRENCY

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        vendor_id: str,
        customer_id: str,
        customer_name: str,
        customer_phone: str,
        delivery_address: str,
        items: list[OrderLineItem],
        notes: str | None = None,
    ) -> Order:
        """Create a new PENDING order, enforcing all invariants."""
        if not vendor_id:
            raise ValidationError("Vendor is required")
        for label, value in (
            ("Customer name", customer_name),
            ("Customer phone", customer_phone),
            ("Delivery address", delivery_address),
        ):
            if not value or not value.strip():
                raise ValidationError(f"{label} is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        currencies = {item.price_at_order_time.currency for item in items}
        if len(currencies) > 1:
            raise ValidationError("All order lines must share one currency")

        return Order(
            id=None,
            vendor_id=vendor_id,
            customer_id=customer_id,
            items=list(items),
            customer_name=customer_name.strip(),
            customer_phone=customer_phone.strip(),
            delivery_address=delivery_address.strip(),
            notes=notes.strip() if notes and notes.strip() else None,
            currency=currencies.pop(),
        )

    # --- State transitions ----------------------------------------------------

    def apply_transition(
        self, expected_source: OrderStatus, target: OrderStatus
    ) -> None:
        """Compare-and-set the status.

        Raises StaleStateError when the order no longer holds
        ``expected_source`` and InvalidTransitionError when no actor may
        make the move. Nothing changes unless both checks pass.
        """
        if self.status != expected_source:
            raise StaleStateError(
                f"Order #{self.id} is {self.status.value}, "
                f"expected {expected_source.value}"
            )
        if self.status.is_terminal or not order_lifecycle.is_legal(self.status, target):
            raise InvalidTransitionError(
                f"Cannot move order #{self.id} from {self.status.value} "
                f"to {target.value}"
            )
        self.status = target

    def cancel(self, expected_source: OrderStatus, reason: str | None = None) -> None:
        self.apply_transition(expected_source, OrderStatus.CANCELLED)
        self.cancellation_reason = reason

    # --- Computed properties --------------------------------------------------

    @property
    def total_amount(self) -> Money:
        result = Money.zero(self.currency)
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

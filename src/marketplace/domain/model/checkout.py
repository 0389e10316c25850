"""Value types exchanged at checkout."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from marketplace.domain.model.value_objects import DEFAULT_CURRENCY, Money


@dataclass(frozen=True)
class CustomerInfo:
    """Contact and delivery fields typed in at checkout."""

    customer_name: str
    customer_phone: str
    delivery_address: str
    email: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class RequestedItem:
    catalog_item_id: str
    quantity: int


@dataclass(frozen=True)
class VendorOrderRequest:
    """What the client asks one vendor's backend to create.

    Carries no prices: the backend prices every line itself.
    """

    vendor_id: str
    customer_name: str
    customer_phone: str
    delivery_address: str
    items: tuple[RequestedItem, ...]
    notes: str | None = None


@dataclass(frozen=True)
class FeeSchedule:
    """Flat fees added to the displayed grand total.

    Charged once per checkout unless ``per_vendor`` is set, in which case
    every vendor order carries its own pair of fees.
    """

    delivery_fee: Money = Money(Decimal("300"), DEFAULT_CURRENCY)
    service_fee: Money = Money(Decimal("25"), DEFAULT_CURRENCY)
    per_vendor: bool = False


@dataclass(frozen=True)
class CheckoutQuote:
    subtotal: Money
    delivery_fee: Money
    service_fee: Money
    grand_total: Money
    vendor_count: int

"""Domain service: Order Splitter.

Turns one multi-vendor cart into one creation request per vendor. Pure:
validation happens here, synchronously, before anything is sent to a
backend.
"""

from __future__ import annotations

from marketplace.domain.exceptions import EmptyCartError, ValidationError
from marketplace.domain.model.cart import Cart
from marketplace.domain.model.checkout import (
    CheckoutQuote,
    CustomerInfo,
    FeeSchedule,
    RequestedItem,
    VendorOrderRequest,
)
from marketplace.domain.model.value_objects import Money


def validate_customer_info(info: CustomerInfo) -> None:
    missing = [
        label
        for label, value in (
            ("customer name", info.customer_name),
            ("customer phone", info.customer_phone),
            ("delivery address", info.delivery_address),
        )
        if not value or not value.strip()
    ]
    if missing:
        raise ValidationError(
            f"Missing required checkout fields: {', '.join(missing)}"
        )


def split_cart(cart: Cart, info: CustomerInfo) -> list[VendorOrderRequest]:
    """Build one VendorOrderRequest per vendor present in the cart.

    Vendors appear in the order they were first added to the cart, and
    each request holds only that vendor's lines.
    """
    if cart.is_empty():
        raise EmptyCartError("Your cart is empty")
    validate_customer_info(info)

    notes = info.notes.strip() if info.notes and info.notes.strip() else None
    return [
        VendorOrderRequest(
            vendor_id=vendor_id,
            customer_name=info.customer_name.strip(),
            customer_phone=info.customer_phone.strip(),
            delivery_address=info.delivery_address.strip(),
            items=tuple(
                RequestedItem(catalog_item_id=line.id, quantity=line.quantity)
                for line in lines
            ),
            notes=notes,
        )
        for vendor_id, lines in cart.get_cart_by_vendor().items()
    ]


def quote_checkout(cart: Cart, fees: FeeSchedule) -> CheckoutQuote:
    """Price the checkout for display. An empty cart carries no fees."""
    subtotal = cart.get_total_amount()
    vendor_count = len(cart.get_cart_by_vendor())

    if vendor_count == 0:
        delivery_fee = service_fee = Money.zero(subtotal.currency)
    elif fees.per_vendor:
        delivery_fee = fees.delivery_fee * vendor_count
        service_fee = fees.service_fee * vendor_count
    else:
        delivery_fee = fees.delivery_fee
        service_fee = fees.service_fee

    return CheckoutQuote(
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        service_fee=service_fee,
        grand_total=subtotal + delivery_fee + service_fee,
        vendor_count=vendor_count,
    )

"""Application service: Checkout use case.

Splits the cart into one order per vendor and places them concurrently.
Vendors fulfil independently, so there is no cross-vendor transaction:
if some vendors accept and others fail, the accepted orders stand and
the result says exactly which vendors went through. The caller may
retry with ``vendor_ids`` restricted to the failed ones.

The cart is cleared, and the contact details remembered, only when every
requested vendor order was created.
"""

from __future__ import annotations

import asyncio

import structlog

from marketplace.application.dto import CheckoutResult, VendorOutcome, order_to_dto
from marketplace.domain.exceptions import DomainException, ValidationError
from marketplace.domain.model.checkout import (
    CustomerInfo,
    FeeSchedule,
    VendorOrderRequest,
)
from marketplace.domain.repository.cart_repository import CartRepository
from marketplace.domain.repository.order_backend import OrderBackend
from marketplace.domain.repository.profile_cache import ProfileCache
from marketplace.domain.service.order_splitter import quote_checkout, split_cart

logger = structlog.get_logger(__name__)

# Payment is not processed; the method is only a label on the checkout.
PAYMENT_METHODS = ("cash", "card", "mobile")


class CheckoutHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        order_backend: OrderBackend,
        profile_cache: ProfileCache,
        fees: FeeSchedule,
        customer_id: str,
    ) -> None:
        self._cart_repo = cart_repo
        self._order_backend = order_backend
        self._profile_cache = profile_cache
        self._fees = fees
        self._customer_id = customer_id

    async def handle(
        self,
        info: CustomerInfo,
        payment_method: str = "cash",
        vendor_ids: list[str] | None = None,
    ) -> CheckoutResult:
        """Place one order per vendor in the cart.

        Args:
            info: Contact and delivery details.
            payment_method: One of ``PAYMENT_METHODS``.
            vendor_ids: If provided, only these vendors' orders are placed
                (used to retry the failed part of an earlier checkout). The
                reported grand total then covers only those vendors.
        """
        if payment_method not in PAYMENT_METHODS:
            raise ValidationError(
                f"Unknown payment method '{payment_method}' "
                f"(expected one of: {', '.join(PAYMENT_METHODS)})"
            )

        cart = self._cart_repo.load()
        requests = split_cart(cart, info)

        if vendor_ids is not None:
            requests = self._restrict(requests, vendor_ids)
            quote = quote_checkout(cart.for_vendors(vendor_ids), self._fees)
        else:
            quote = quote_checkout(cart, self._fees)
        logger.info(
            "Dispatching checkout",
            customer_id=self._customer_id,
            vendor_ids=[r.vendor_id for r in requests],
            grand_total=str(quote.grand_total),
            payment_method=payment_method,
        )

        # Once dispatched the request set runs to completion even if the
        # caller is cancelled.
        outcomes = await asyncio.shield(
            asyncio.gather(*(self._place(request) for request in requests))
        )
        result = CheckoutResult(
            outcomes=list(outcomes),
            payment_method=payment_method,
            grand_total=str(quote.grand_total),
        )

        if result.is_complete:
            self._remember(info)
            cart.clear()
            self._cart_repo.save(cart)
            logger.info(
                "Checkout complete",
                customer_id=self._customer_id,
                order_ids=[order.id for order in result.orders],
            )
        else:
            logger.warning(
                "Checkout partially failed",
                customer_id=self._customer_id,
                succeeded=result.succeeded_vendor_ids,
                failed=result.failed_vendor_ids,
            )
        return result

    def prefill(self) -> CustomerInfo:
        """Checkout fields pre-filled from the last successful checkout."""
        profile = self._profile_cache.load()
        return CustomerInfo(
            customer_name=profile.name or "",
            customer_phone=profile.phone or "",
            delivery_address=profile.address or "",
            email=profile.email,
        )

    # --- Internal helpers -----------------------------------------------------

    async def _place(self, request: VendorOrderRequest) -> VendorOutcome:
        try:
            order = await self._order_backend.create(request, self._customer_id)
        except DomainException as exc:
            logger.warning(
                "Vendor order failed",
                vendor_id=request.vendor_id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return VendorOutcome.failure(request.vendor_id, exc)

        logger.info(
            "Vendor order created",
            vendor_id=request.vendor_id,
            order_id=order.id,
        )
        return VendorOutcome.success(request.vendor_id, order_to_dto(order))

    @staticmethod
    def _restrict(
        requests: list[VendorOrderRequest], vendor_ids: list[str]
    ) -> list[VendorOrderRequest]:
        wanted = set(vendor_ids)
        present = {request.vendor_id for request in requests}
        unknown = sorted(wanted - present)
        if unknown:
            raise ValidationError(
                f"No items in the cart for vendor(s): {', '.join(unknown)}"
            )
        if not wanted:
            raise ValidationError("At least one vendor must be selected")
        return [request for request in requests if request.vendor_id in wanted]

    def _remember(self, info: CustomerInfo) -> None:
        self._profile_cache.set("name", info.customer_name.strip())
        self._profile_cache.set("phone", info.customer_phone.strip())
        self._profile_cache.set("address", info.delivery_address.strip())
        if info.email and info.email.strip():
            self._profile_cache.set("email", info.email.strip())

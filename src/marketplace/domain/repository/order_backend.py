"""Abstract order backend.

The backend owns persisted orders and is the sole authority on prices.
Every call is asynchronous. Status writes are compare-and-set: they
succeed only while the order still holds ``expected_source``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.model.checkout import VendorOrderRequest
from marketplace.domain.model.order import Order
from marketplace.domain.model.status import OrderStatus


class OrderBackend(ABC):

    @abstractmethod
    async def create(self, request: VendorOrderRequest, customer_id: str) -> Order:
        """Create one PENDING order for one vendor, pricing it server-side."""

    @abstractmethod
    async def get_by_id(self, order_id: str) -> Order:
        """Return an order; raises EntityNotFoundError if unknown."""

    @abstractmethod
    async def list_for_customer(self, customer_id: str) -> list[Order]:
        """Return every order placed by a customer, newest first."""

    @abstractmethod
    async def list_for_vendor(self, vendor_id: str) -> list[Order]:
        """Return every order addressed to a vendor, newest first."""

    @abstractmethod
    async def update_status(
        self,
        order_id: str,
        expected_source: OrderStatus,
        target: OrderStatus,
    ) -> Order:
        """Move an order to ``target``; StaleStateError if it moved on."""

    @abstractmethod
    async def cancel(
        self,
        order_id: str,
        reason: str | None,
        expected_source: OrderStatus,
    ) -> Order:
        """Cancel an order; StaleStateError if it moved on."""

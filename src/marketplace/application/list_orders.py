"""Application services: order lists for customers and vendors (queries)."""

from __future__ import annotations

from datetime import datetime, timezone

from marketplace.application.dto import (
    CustomerOrdersDTO,
    VendorOrdersDTO,
    order_to_dto,
    stats_to_dto,
)
from marketplace.domain.model.status import OrderStatus
from marketplace.domain.repository.order_backend import OrderBackend
from marketplace.domain.service.order_query import (
    ALL,
    count_by_status,
    filter_by_status,
    partition_by_phase,
    vendor_stats,
)


class ListCustomerOrdersHandler:
    """Live and past orders of the current customer."""

    def __init__(self, order_backend: OrderBackend, customer_id: str) -> None:
        self._order_backend = order_backend
        self._customer_id = customer_id

    async def handle(self) -> CustomerOrdersDTO:
        orders = await self._order_backend.list_for_customer(self._customer_id)
        phases = partition_by_phase(orders)
        return CustomerOrdersDTO(
            live=[order_to_dto(o) for o in phases.live],
            past=[order_to_dto(o) for o in phases.past],
        )


class ListVendorOrdersHandler:
    """A vendor's orders filtered by status, with per-status counts.

    The dashboard stats always cover every order of the vendor, whatever
    the status filter.
    """

    def __init__(self, order_backend: OrderBackend) -> None:
        self._order_backend = order_backend

    async def handle(
        self,
        vendor_id: str,
        status: OrderStatus | str = ALL,
        now: datetime | None = None,
    ) -> VendorOrdersDTO:
        orders = await self._order_backend.list_for_vendor(vendor_id)
        stats = vendor_stats(orders, now or datetime.now(timezone.utc))
        return VendorOrdersDTO(
            orders=[order_to_dto(o) for o in filter_by_status(orders, status)],
            counts={s.value: n for s, n in count_by_status(orders).items()},
            stats=stats_to_dto(stats),
        )

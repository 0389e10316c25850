"""JSON-file-backed implementation of OrderBackend.

Stands in for the remote order service when running locally: it prices
every line from the catalog at creation time and applies status changes
as compare-and-set under a lock, so concurrent writers see the same
conflicts they would against the real service.
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from marketplace.domain.exceptions import EntityNotFoundError, ValidationError
from marketplace.domain.model.checkout import VendorOrderRequest
from marketplace.domain.model.order import Order, OrderLineItem
from marketplace.domain.model.status import OrderStatus
from marketplace.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from marketplace.domain.repository.catalog_repository import CatalogRepository
from marketplace.domain.repository.order_backend import OrderBackend


class JsonOrderBackend(OrderBackend):

    def __init__(self, file_path: Path, catalog_repo: CatalogRepository) -> None:
        self._file_path = file_path
        self._catalog_repo = catalog_repo
        self._lock = asyncio.Lock()
        self._ensure_file()

    # --- OrderBackend interface -----------------------------------------------

    async def create(self, request: VendorOrderRequest, customer_id: str) -> Order:
        order = Order.create(
            vendor_id=request.vendor_id,
            customer_id=customer_id,
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            delivery_address=request.delivery_address,
            items=self._price_lines(request),
            notes=request.notes,
        )
        async with self._lock:
            records = self._load_raw()
            order.id = self._next_id(records)
            records.append(self._to_raw(order))
            self._persist_raw(records)
        return order

    async def get_by_id(self, order_id: str) -> Order:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        raise EntityNotFoundError(f"Order #{order_id} not found")

    async def list_for_customer(self, customer_id: str) -> list[Order]:
        return self._newest_first(
            raw for raw in self._load_raw() if raw["customer_id"] == customer_id
        )

    async def list_for_vendor(self, vendor_id: str) -> list[Order]:
        return self._newest_first(
            raw for raw in self._load_raw() if raw["vendor_id"] == vendor_id
        )

    async def update_status(
        self,
        order_id: str,
        expected_source: OrderStatus,
        target: OrderStatus,
    ) -> Order:
        async with self._lock:
            records, index, order = self._locate(order_id)
            order.apply_transition(expected_source, target)
            records[index] = self._to_raw(order)
            self._persist_raw(records)
        return order

    async def cancel(
        self,
        order_id: str,
        reason: str | None,
        expected_source: OrderStatus,
    ) -> Order:
        async with self._lock:
            records, index, order = self._locate(order_id)
            order.cancel(expected_source, reason)
            records[index] = self._to_raw(order)
            self._persist_raw(records)
        return order

    # --- Pricing --------------------------------------------------------------

    def _price_lines(self, request: VendorOrderRequest) -> list[OrderLineItem]:
        """Freeze the current catalog price onto every requested line."""
        lines: list[OrderLineItem] = []
        for requested in request.items:
            item = self._catalog_repo.get_by_id(requested.catalog_item_id)
            if item is None:
                raise EntityNotFoundError(
                    f"Catalog item '{requested.catalog_item_id}' not found"
                )
            if item.vendor_id != request.vendor_id:
                raise ValidationError(
                    f"Catalog item '{item.id}' is not sold by vendor "
                    f"'{request.vendor_id}'"
                )
            lines.append(
                OrderLineItem(
                    catalog_item_id=item.id,
                    quantity=Quantity(requested.quantity),
                    price_at_order_time=item.price,  # <-- price snapshot
                    name=item.name,
                )
            )
        return lines

    # --- Internal helpers -----------------------------------------------------

    def _locate(self, order_id: str) -> tuple[list[dict], int, Order]:
        records = self._load_raw()
        for index, raw in enumerate(records):
            if raw["id"] == order_id:
                return records, index, self._to_domain(raw)
        raise EntityNotFoundError(f"Order #{order_id} not found")

    def _newest_first(self, records) -> list[Order]:
        orders = [self._to_domain(raw) for raw in records]
        return sorted(orders, key=lambda o: (o.created_at, int(o.id)), reverse=True)

    @staticmethod
    def _next_id(records: list[dict]) -> str:
        if not records:
            return "1"
        return str(max(int(raw["id"]) for raw in records) + 1)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "vendor_id": order.vendor_id,
            "customer_id": order.customer_id,
            "customer_name": order.customer_name,
            "customer_phone": order.customer_phone,
            "delivery_address": order.delivery_address,
            "status": order.status.value,
            "notes": order.notes,
            "created_at": order.created_at.isoformat(),
            "estimated_delivery_time": (
                order.estimated_delivery_time.isoformat()
                if order.estimated_delivery_time
                else None
            ),
            "cancellation_reason": order.cancellation_reason,
            "currency": order.currency,
            "items": [
                {
                    "catalog_item_id": item.catalog_item_id,
                    "name": item.name,
                    "quantity": item.quantity.value,
                    "price_at_order_time": str(item.price_at_order_time.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", DEFAULT_CURRENCY)
        items = [
            OrderLineItem(
                catalog_item_id=i["catalog_item_id"],
                quantity=Quantity(i["quantity"]),
                price_at_order_time=Money(Decimal(i["price_at_order_time"]), currency),
                name=i.get("name"),
            )
            for i in raw["items"]
        ]
        eta = raw.get("estimated_delivery_time")
        return Order(
            id=raw["id"],
            vendor_id=raw["vendor_id"],
            customer_id=raw["customer_id"],
            items=items,
            customer_name=raw["customer_name"],
            customer_phone=raw["customer_phone"],
            delivery_address=raw["delivery_address"],
            status=OrderStatus(raw["status"]),
            notes=raw.get("notes"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            estimated_delivery_time=datetime.fromisoformat(eta) if eta else None,
            cancellation_reason=raw.get("cancellation_reason"),
            currency=currency,
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")

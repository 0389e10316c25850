"""OrderBackend implementation talking to the marketplace REST API.

Failures are mapped back to the closest domain error so callers never
see transport types:

    401, 403        -> AuthError
    404             -> EntityNotFoundError
    409             -> StaleStateError
    400, 422        -> ValidationError
    anything else   -> NetworkError (also timeouts and connection errors)
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import httpx
import structlog

from marketplace.domain.exceptions import (
    AuthError,
    DomainException,
    EntityNotFoundError,
    NetworkError,
    StaleStateError,
    ValidationError,
)
from marketplace.domain.model.checkout import VendorOrderRequest
from marketplace.domain.model.order import Order, OrderLineItem
from marketplace.domain.model.status import OrderStatus
from marketplace.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from marketplace.domain.repository.order_backend import OrderBackend

logger = structlog.get_logger(__name__)

_STATUS_ERRORS: dict[int, type[DomainException]] = {
    400: ValidationError,
    401: AuthError,
    403: AuthError,
    404: EntityNotFoundError,
    409: StaleStateError,
    422: ValidationError,
}


class HttpOrderBackend(OrderBackend):

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        currency: str = DEFAULT_CURRENCY,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._currency = currency
        self._transport = transport

    # --- OrderBackend interface -----------------------------------------------

    async def create(self, request: VendorOrderRequest, customer_id: str) -> Order:
        # The bearer credential identifies the customer server-side.
        payload: dict[str, Any] = {
            "vendorId": request.vendor_id,
            "customerName": request.customer_name,
            "customerPhone": request.customer_phone,
            "deliveryAddress": request.delivery_address,
            "items": [
                {"catalogItemId": i.catalog_item_id, "quantity": i.quantity}
                for i in request.items
            ],
        }
        if request.notes:
            payload["notes"] = request.notes
        data = await self._request("POST", "/api/orders", json=payload)
        return self._decode(data)

    async def get_by_id(self, order_id: str) -> Order:
        return self._decode(await self._request("GET", f"/api/orders/{order_id}"))

    async def list_for_customer(self, customer_id: str) -> list[Order]:
        data = await self._request("GET", "/api/orders/customer")
        return self._decode_list(data)

    async def list_for_vendor(self, vendor_id: str) -> list[Order]:
        data = await self._request("GET", f"/api/orders/vendor/{vendor_id}")
        return self._decode_list(data)

    async def update_status(
        self,
        order_id: str,
        expected_source: OrderStatus,
        target: OrderStatus,
    ) -> Order:
        data = await self._request(
            "PATCH",
            f"/api/orders/{order_id}/status",
            json={"status": target.value, "expectedStatus": expected_source.value},
        )
        return self._decode(data)

    async def cancel(
        self,
        order_id: str,
        reason: str | None,
        expected_source: OrderStatus,
    ) -> Order:
        data = await self._request(
            "PATCH",
            f"/api/orders/{order_id}/cancel",
            json={"reason": reason, "expectedStatus": expected_source.value},
        )
        return self._decode(data)

    # --- Transport ------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            async with self._client() as client:
                response = await client.request(method, path, json=json)
        except httpx.TimeoutException as exc:
            logger.warning("Order API timed out", method=method, path=path)
            raise NetworkError(f"Order service timed out ({method} {path})") from exc
        except httpx.RequestError as exc:
            logger.warning(
                "Order API unreachable", method=method, path=path, error=str(exc)
            )
            raise NetworkError(f"Order service unavailable: {exc}") from exc

        if response.is_success:
            try:
                return response.json()
            except ValueError as exc:
                logger.warning(
                    "Order API returned a non-JSON body",
                    method=method,
                    path=path,
                    status_code=response.status_code,
                )
                raise NetworkError(
                    f"Order service sent an unreadable reply ({method} {path})"
                ) from exc

        message = self._error_message(response)
        logger.warning(
            "Order API error",
            method=method,
            path=path,
            status_code=response.status_code,
            error=message,
        )
        error_type = _STATUS_ERRORS.get(response.status_code, NetworkError)
        raise error_type(f"{message} (HTTP {response.status_code})")

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict):
            for key in ("message", "error", "detail"):
                if body.get(key):
                    return str(body[key])
        return response.text or response.reason_phrase

    # --- Deserialization ------------------------------------------------------

    def _decode(self, raw: Any) -> Order:
        try:
            return self._to_domain(raw)
        except (KeyError, TypeError, AttributeError, ValueError, ValidationError) as exc:
            logger.warning("Order API reply malformed", error=repr(exc))
            raise NetworkError(
                f"Order service sent a malformed order: {exc!r}"
            ) from exc

    def _decode_list(self, raw: Any) -> list[Order]:
        if not isinstance(raw, list):
            raise NetworkError("Order service sent a malformed order list")
        return [self._decode(item) for item in raw]

    def _to_domain(self, raw: dict) -> Order:
        currency = raw.get("currency", self._currency)
        items = []
        for item in raw.get("items", []):
            menu_item = item.get("menuItem") or {}
            price = item.get("priceAtOrderTime", item.get("price", menu_item.get("price")))
            items.append(
                OrderLineItem(
                    catalog_item_id=str(
                        item.get("catalogItemId") or item.get("menuItemId") or menu_item.get("id")
                    ),
                    quantity=Quantity(int(item["quantity"])),
                    price_at_order_time=Money.of(price, currency),
                    name=item.get("name") or menu_item.get("name"),
                )
            )
        return Order(
            id=str(raw["id"]),
            vendor_id=str(raw.get("vendorId") or raw.get("restaurantId") or ""),
            customer_id=str(raw.get("customerId") or ""),
            items=items,
            customer_name=raw.get("customerName", ""),
            customer_phone=raw.get("customerPhone", ""),
            delivery_address=raw.get("deliveryAddress", ""),
            status=OrderStatus(raw["status"]),
            notes=raw.get("notes"),
            created_at=_parse_datetime(raw["createdAt"]),
            estimated_delivery_time=(
                _parse_datetime(raw["estimatedDeliveryTime"])
                if raw.get("estimatedDeliveryTime")
                else None
            ),
            cancellation_reason=raw.get("cancellationReason"),
            currency=currency,
        )


def _parse_datetime(value: str) -> datetime:
    # fromisoformat() only accepts a trailing "Z" from Python 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)

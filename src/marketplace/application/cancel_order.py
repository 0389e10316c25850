"""Application service: Cancel Order use case.

Customers and vendors may cancel until preparation is complete. Once an
order is READY the cancellation window is closed.
"""

from __future__ import annotations

from marketplace.application.dto import OrderDTO
from marketplace.application.update_order_status import UpdateOrderStatusHandler
from marketplace.domain.model.status import ActorRole, OrderStatus
from marketplace.domain.repository.order_backend import OrderBackend


class CancelOrderHandler:

    def __init__(self, order_backend: OrderBackend) -> None:
        self._order_backend = order_backend

    async def handle(
        self, order_id: str, role: ActorRole, reason: str | None = None
    ) -> OrderDTO:
        order = await self._order_backend.get_by_id(order_id)

        updater = UpdateOrderStatusHandler(self._order_backend)
        return await updater.handle(
            order_id,
            role,
            expected_source=order.status,
            target=OrderStatus.CANCELLED,
            reason=reason,
        )

"""Application service: Advance Order use case.

Moves an order one step forward on behalf of a vendor (accept, start
preparing, mark ready) or a driver (dispatch, deliver).
"""

from __future__ import annotations

from marketplace.application.dto import OrderDTO
from marketplace.application.update_order_status import UpdateOrderStatusHandler
from marketplace.domain.model.status import ActorRole
from marketplace.domain.repository.order_backend import OrderBackend
from marketplace.domain.service import order_lifecycle


class AdvanceOrderHandler:

    def __init__(self, order_backend: OrderBackend) -> None:
        self._order_backend = order_backend

    async def handle(self, order_id: str, role: ActorRole) -> OrderDTO:
        order = await self._order_backend.get_by_id(order_id)
        target = order_lifecycle.resolve_advance(order.status, role)

        updater = UpdateOrderStatusHandler(self._order_backend)
        return await updater.handle(
            order_id, role, expected_source=order.status, target=target
        )

"""Application service: Show Order use case (query)."""

from __future__ import annotations

from marketplace.application.dto import OrderDTO, order_to_dto
from marketplace.domain.repository.order_backend import OrderBackend


class ShowOrderHandler:

    def __init__(self, order_backend: OrderBackend) -> None:
        self._order_backend = order_backend

    async def handle(self, order_id: str) -> OrderDTO:
        order = await self._order_backend.get_by_id(order_id)
        return order_to_dto(order)

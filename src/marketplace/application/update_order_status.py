"""Application service: Update Order Status use case.

The caller names the status it believes the order is in and the status
it wants. The lifecycle rules are checked before anything is sent; the
backend then applies the change only if the order still holds the
expected status.
"""

from __future__ import annotations

import structlog

from marketplace.application.dto import OrderDTO, order_to_dto
from marketplace.domain.exceptions import StaleStateError
from marketplace.domain.model.status import ActorRole, OrderStatus
from marketplace.domain.repository.order_backend import OrderBackend
from marketplace.domain.service import order_lifecycle

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_backend: OrderBackend) -> None:
        self._order_backend = order_backend

    async def handle(
        self,
        order_id: str,
        role: ActorRole,
        expected_source: OrderStatus,
        target: OrderStatus,
        reason: str | None = None,
    ) -> OrderDTO:
        order_lifecycle.resolve_transition(expected_source, role, target)

        current = await self._order_backend.get_by_id(order_id)
        if (
            current.status == target
            and order_lifecycle.only_source_of(target) == expected_source
        ):
            # The same change already applied. A target reachable from
            # several sources goes to the backend, which rejects a stale one.
            logger.info(
                "Order status already applied",
                order_id=order_id,
                status=target.value,
            )
            return order_to_dto(current)

        try:
            if target == OrderStatus.CANCELLED:
                order = await self._order_backend.cancel(
                    order_id, reason, expected_source
                )
            else:
                order = await self._order_backend.update_status(
                    order_id, expected_source, target
                )
        except StaleStateError:
            logger.warning(
                "Order status changed concurrently",
                order_id=order_id,
                expected=expected_source.value,
                target=target.value,
            )
            raise

        logger.info(
            "Order status updated",
            order_id=order_id,
            role=role.value,
            source=expected_source.value,
            target=order.status.value,
        )
        return order_to_dto(order)

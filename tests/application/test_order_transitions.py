"""Integration tests for the status change use cases.

Covers UpdateOrderStatus, AdvanceOrder and CancelOrder against the
in-memory backend.
"""

import pytest

from marketplace.application.advance_order import AdvanceOrderHandler
from marketplace.application.cancel_order import CancelOrderHandler
from marketplace.application.show_order import ShowOrderHandler
from marketplace.application.update_order_status import UpdateOrderStatusHandler
from marketplace.domain.exceptions import (
    EntityNotFoundError,
    InvalidTransitionError,
    StaleStateError,
)
from marketplace.domain.model.status import ActorRole, OrderStatus
from tests.fakes import FakeOrderBackend, make_order


def _setup(status: OrderStatus = OrderStatus.PENDING):
    backend = FakeOrderBackend()
    order = backend.put(make_order(status))
    return backend, order.id


# ── UpdateOrderStatus ────────────────────────────────────────────────────────


class TestUpdateOrderStatus:

    @pytest.mark.asyncio
    async def test_vendor_accepts(self):
        backend, order_id = _setup()
        dto = await UpdateOrderStatusHandler(backend).handle(
            order_id, ActorRole.VENDOR, OrderStatus.PENDING, OrderStatus.ACCEPTED
        )
        assert dto.status == "ACCEPTED"

    @pytest.mark.asyncio
    async def test_illegal_move_fails_before_backend(self):
        backend, order_id = _setup()
        with pytest.raises(InvalidTransitionError):
            await UpdateOrderStatusHandler(backend).handle(
                order_id, ActorRole.CUSTOMER, OrderStatus.PENDING, OrderStatus.ACCEPTED
            )
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_stale_expected_source(self):
        backend, order_id = _setup(OrderStatus.PREPARING)
        with pytest.raises(StaleStateError):
            await UpdateOrderStatusHandler(backend).handle(
                order_id, ActorRole.VENDOR, OrderStatus.PENDING, OrderStatus.ACCEPTED
            )
        order = await backend.get_by_id(order_id)
        assert order.status == OrderStatus.PREPARING

    @pytest.mark.asyncio
    async def test_reapplying_same_change_is_noop(self):
        backend, order_id = _setup()
        handler = UpdateOrderStatusHandler(backend)
        await handler.handle(
            order_id, ActorRole.VENDOR, OrderStatus.PENDING, OrderStatus.ACCEPTED
        )
        dto = await handler.handle(
            order_id, ActorRole.VENDOR, OrderStatus.PENDING, OrderStatus.ACCEPTED
        )
        assert dto.status == "ACCEPTED"
        assert backend.calls.count("update_status") == 1

    @pytest.mark.asyncio
    async def test_cancel_from_other_source_is_stale_not_noop(self):
        backend, order_id = _setup(OrderStatus.ACCEPTED)
        order = await backend.get_by_id(order_id)
        order.cancel(OrderStatus.ACCEPTED, "Vendor closed")

        with pytest.raises(StaleStateError):
            await UpdateOrderStatusHandler(backend).handle(
                order_id,
                ActorRole.CUSTOMER,
                OrderStatus.PENDING,
                OrderStatus.CANCELLED,
            )
        assert (await backend.get_by_id(order_id)).cancellation_reason == "Vendor closed"

    @pytest.mark.asyncio
    async def test_cancel_target_goes_through_cancel(self):
        backend, order_id = _setup()
        dto = await UpdateOrderStatusHandler(backend).handle(
            order_id,
            ActorRole.CUSTOMER,
            OrderStatus.PENDING,
            OrderStatus.CANCELLED,
            reason="Changed my mind",
        )
        assert dto.status == "CANCELLED"
        assert dto.cancellation_reason == "Changed my mind"
        assert "cancel" in backend.calls

    @pytest.mark.asyncio
    async def test_unknown_order(self):
        backend, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            await UpdateOrderStatusHandler(backend).handle(
                "999", ActorRole.VENDOR, OrderStatus.PENDING, OrderStatus.ACCEPTED
            )


# ── AdvanceOrder ─────────────────────────────────────────────────────────────


class TestAdvanceOrder:

    @pytest.mark.asyncio
    async def test_full_happy_path(self):
        backend, order_id = _setup()
        handler = AdvanceOrderHandler(backend)
        seen = []
        for role in [ActorRole.VENDOR] * 3 + [ActorRole.DRIVER] * 2:
            seen.append((await handler.handle(order_id, role)).status)
        assert seen == ["ACCEPTED", "PREPARING", "READY", "DISPATCHED", "DELIVERED"]

    @pytest.mark.asyncio
    async def test_driver_cannot_touch_pending(self):
        backend, order_id = _setup()
        with pytest.raises(InvalidTransitionError):
            await AdvanceOrderHandler(backend).handle(order_id, ActorRole.DRIVER)

    @pytest.mark.asyncio
    async def test_delivered_is_final(self):
        backend, order_id = _setup(OrderStatus.DELIVERED)
        with pytest.raises(InvalidTransitionError, match="no further status changes"):
            await AdvanceOrderHandler(backend).handle(order_id, ActorRole.DRIVER)


# ── CancelOrder ──────────────────────────────────────────────────────────────


class TestCancelOrder:

    @pytest.mark.asyncio
    async def test_customer_cancels_accepted_order(self):
        backend, order_id = _setup(OrderStatus.ACCEPTED)
        dto = await CancelOrderHandler(backend).handle(order_id, ActorRole.CUSTOMER)
        assert dto.status == "CANCELLED"

    @pytest.mark.asyncio
    async def test_vendor_cannot_cancel_ready_order(self):
        backend, order_id = _setup(OrderStatus.READY)
        with pytest.raises(InvalidTransitionError):
            await CancelOrderHandler(backend).handle(order_id, ActorRole.VENDOR, "late")
        order = await backend.get_by_id(order_id)
        assert order.status == OrderStatus.READY

    @pytest.mark.asyncio
    async def test_driver_cannot_cancel(self):
        backend, order_id = _setup(OrderStatus.PENDING)
        with pytest.raises(InvalidTransitionError):
            await CancelOrderHandler(backend).handle(order_id, ActorRole.DRIVER)


# ── ShowOrder ────────────────────────────────────────────────────────────────


class TestShowOrder:

    @pytest.mark.asyncio
    async def test_shows_order(self):
        backend, order_id = _setup()
        dto = await ShowOrderHandler(backend).handle(order_id)
        assert dto.id == order_id
        assert dto.total == "D100.00"
        assert dto.items[0].name == "m1"
        assert dto.created_at.endswith("UTC")

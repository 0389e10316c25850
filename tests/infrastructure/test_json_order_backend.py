"""Tests for the JSON-file order backend (uses tmp_path)."""

import asyncio

import pytest

from marketplace.domain.exceptions import (
    EntityNotFoundError,
    InvalidTransitionError,
    StaleStateError,
    ValidationError,
)
from marketplace.domain.model.checkout import RequestedItem, VendorOrderRequest
from marketplace.domain.model.status import OrderStatus
from marketplace.domain.model.value_objects import Money
from marketplace.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)
from marketplace.infrastructure.persistence.json_order_backend import JsonOrderBackend
from tests.fakes import make_catalog_item


def _setup(tmp_path):
    catalog = JsonCatalogRepository(tmp_path / "catalog.json")
    catalog.save(make_catalog_item("m1", "R1", "50"))
    catalog.save(make_catalog_item("m2", "R1", "20"))
    catalog.save(make_catalog_item("p1", "P1", "75"))
    backend = JsonOrderBackend(tmp_path / "orders.json", catalog)
    return backend, catalog


def _request(vendor_id="R1", items=(("m1", 2), ("m2", 1))) -> VendorOrderRequest:
    return VendorOrderRequest(
        vendor_id=vendor_id,
        customer_name="Awa",
        customer_phone="+220 555 0101",
        delivery_address="12 Kairaba Ave",
        items=tuple(RequestedItem(i, q) for i, q in items),
    )


class TestCreate:

    @pytest.mark.asyncio
    async def test_prices_from_catalog(self, tmp_path):
        backend, _ = _setup(tmp_path)
        order = await backend.create(_request(), "c1")
        assert order.id == "1"
        assert order.status == OrderStatus.PENDING
        assert order.total_amount == Money.of("120")
        assert order.items[0].name == "Item m1"

    @pytest.mark.asyncio
    async def test_sequential_ids(self, tmp_path):
        backend, _ = _setup(tmp_path)
        first = await backend.create(_request(), "c1")
        second = await backend.create(_request("P1", (("p1", 1),)), "c1")
        assert (first.id, second.id) == ("1", "2")

    @pytest.mark.asyncio
    async def test_unknown_item(self, tmp_path):
        backend, _ = _setup(tmp_path)
        with pytest.raises(EntityNotFoundError):
            await backend.create(_request(items=(("zz", 1),)), "c1")

    @pytest.mark.asyncio
    async def test_item_from_other_vendor(self, tmp_path):
        backend, _ = _setup(tmp_path)
        with pytest.raises(ValidationError, match="not sold by vendor"):
            await backend.create(_request("R1", (("p1", 1),)), "c1")

    @pytest.mark.asyncio
    async def test_price_locked_at_creation(self, tmp_path):
        backend, catalog = _setup(tmp_path)
        order = await backend.create(_request(), "c1")

        item = catalog.get_by_id("m1")
        item.update_price(Money.of("999"))
        catalog.save(item)

        reloaded = await backend.get_by_id(order.id)
        assert reloaded.total_amount == Money.of("120")


class TestQueries:

    @pytest.mark.asyncio
    async def test_round_trip(self, tmp_path):
        backend, _ = _setup(tmp_path)
        created = await backend.create(_request(), "c1")
        loaded = await backend.get_by_id(created.id)
        assert loaded.customer_name == "Awa"
        assert loaded.created_at == created.created_at
        assert [i.quantity.value for i in loaded.items] == [2, 1]

    @pytest.mark.asyncio
    async def test_not_found(self, tmp_path):
        backend, _ = _setup(tmp_path)
        with pytest.raises(EntityNotFoundError, match="#42 not found"):
            await backend.get_by_id("42")

    @pytest.mark.asyncio
    async def test_lists_newest_first(self, tmp_path):
        backend, _ = _setup(tmp_path)
        await backend.create(_request(), "c1")
        await backend.create(_request("P1", (("p1", 1),)), "c1")
        await backend.create(_request(), "c2")

        mine = await backend.list_for_customer("c1")
        assert [o.id for o in mine] == ["2", "1"]
        vendor = await backend.list_for_vendor("R1")
        assert [o.id for o in vendor] == ["3", "1"]


class TestStatusUpdates:

    @pytest.mark.asyncio
    async def test_update_persists(self, tmp_path):
        backend, _ = _setup(tmp_path)
        order = await backend.create(_request(), "c1")
        await backend.update_status(order.id, OrderStatus.PENDING, OrderStatus.ACCEPTED)
        assert (await backend.get_by_id(order.id)).status == OrderStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_stale_source_rejected(self, tmp_path):
        backend, _ = _setup(tmp_path)
        order = await backend.create(_request(), "c1")
        await backend.update_status(order.id, OrderStatus.PENDING, OrderStatus.ACCEPTED)
        with pytest.raises(StaleStateError):
            await backend.update_status(
                order.id, OrderStatus.PENDING, OrderStatus.ACCEPTED
            )

    @pytest.mark.asyncio
    async def test_illegal_target_rejected(self, tmp_path):
        backend, _ = _setup(tmp_path)
        order = await backend.create(_request(), "c1")
        with pytest.raises(InvalidTransitionError):
            await backend.update_status(
                order.id, OrderStatus.PENDING, OrderStatus.DELIVERED
            )

    @pytest.mark.asyncio
    async def test_cancel_persists_reason(self, tmp_path):
        backend, _ = _setup(tmp_path)
        order = await backend.create(_request(), "c1")
        await backend.cancel(order.id, "Closed early", OrderStatus.PENDING)
        loaded = await backend.get_by_id(order.id)
        assert loaded.status == OrderStatus.CANCELLED
        assert loaded.cancellation_reason == "Closed early"

    @pytest.mark.asyncio
    async def test_concurrent_writers_exactly_one_wins(self, tmp_path):
        """Two actors move the same PENDING order at once."""
        backend, _ = _setup(tmp_path)
        order = await backend.create(_request(), "c1")

        results = await asyncio.gather(
            backend.update_status(order.id, OrderStatus.PENDING, OrderStatus.ACCEPTED),
            backend.cancel(order.id, "Changed my mind", OrderStatus.PENDING),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], StaleStateError)

        final = await backend.get_by_id(order.id)
        winner = [r for r in results if not isinstance(r, Exception)][0]
        assert final.status == winner.status

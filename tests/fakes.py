"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON and HTTP
implementations but keep everything in dicts. No file I/O, no network.
"""

from __future__ import annotations

from marketplace.domain.exceptions import DomainException, EntityNotFoundError
from marketplace.domain.model.cart import Cart, CartLineItem
from marketplace.domain.model.catalog import CatalogItem
from marketplace.domain.model.checkout import VendorOrderRequest
from marketplace.domain.model.order import Order, OrderLineItem
from marketplace.domain.model.status import OrderStatus
from marketplace.domain.model.value_objects import EntityType, Money, Quantity
from marketplace.domain.repository.cart_repository import CartRepository
from marketplace.domain.repository.catalog_repository import CatalogRepository
from marketplace.domain.repository.order_backend import OrderBackend
from marketplace.domain.repository.profile_cache import ProfileCache


def make_catalog_item(
    item_id: str,
    vendor_id: str = "r1",
    price: str = "50",
    name: str | None = None,
    entity_type: EntityType = EntityType.RESTAURANT,
) -> CatalogItem:
    return CatalogItem(
        id=item_id,
        name=name or f"Item {item_id}",
        price=Money.of(price),
        vendor_id=vendor_id,
        vendor_name=f"Vendor {vendor_id}",
        entity_type=entity_type,
    )


def make_line(
    item_id: str,
    vendor_id: str = "r1",
    price: str = "50",
    quantity: int = 1,
    entity_type: EntityType = EntityType.RESTAURANT,
) -> CartLineItem:
    return CartLineItem.from_catalog(
        make_catalog_item(item_id, vendor_id, price, entity_type=entity_type),
        quantity,
    )


class FakeCatalogRepository(CatalogRepository):

    def __init__(self, items: list[CatalogItem] | None = None) -> None:
        self._store: dict[str, CatalogItem] = {}
        for item in items or []:
            self._store[item.id] = item

    def get_by_id(self, item_id: str) -> CatalogItem | None:
        return self._store.get(item_id)

    def list_all(self) -> list[CatalogItem]:
        return list(self._store.values())

    def list_for_vendor(self, vendor_id: str) -> list[CatalogItem]:
        return [i for i in self._store.values() if i.vendor_id == vendor_id]

    def save(self, item: CatalogItem) -> None:
        self._store[item.id] = item

    def delete(self, item_id: str) -> None:
        self._store.pop(item_id, None)


class FakeCartRepository(CartRepository):
    """Keeps one Cart object; ``load`` always returns the same instance."""

    def __init__(self, cart: Cart | None = None) -> None:
        self.cart = cart if cart is not None else Cart()
        self.saves = 0

    def load(self) -> Cart:
        return self.cart

    def save(self, cart: Cart) -> None:
        self.cart = cart
        self.saves += 1


class FakeProfileCache(ProfileCache):

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(values or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class FakeOrderBackend(OrderBackend):
    """In-memory order service.

    Prices every line at a flat ``unit_price`` unless the catalog knows the
    item. ``fail_for`` maps vendor ids to the exception their ``create``
    call should raise.
    """

    def __init__(
        self,
        catalog: FakeCatalogRepository | None = None,
        fail_for: dict[str, DomainException] | None = None,
        unit_price: str = "10",
    ) -> None:
        self._catalog = catalog or FakeCatalogRepository()
        self._store: dict[str, Order] = {}
        self._next_id = 1
        self.fail_for: dict[str, DomainException] = dict(fail_for or {})
        self.unit_price = unit_price
        self.created_requests: list[VendorOrderRequest] = []
        self.calls: list[str] = []

    async def create(self, request: VendorOrderRequest, customer_id: str) -> Order:
        self.calls.append("create")
        if request.vendor_id in self.fail_for:
            raise self.fail_for[request.vendor_id]

        lines = []
        for requested in request.items:
            item = self._catalog.get_by_id(requested.catalog_item_id)
            price = item.price if item else Money.of(self.unit_price)
            lines.append(
                OrderLineItem(
                    catalog_item_id=requested.catalog_item_id,
                    quantity=Quantity(requested.quantity),
                    price_at_order_time=price,
                    name=item.name if item else None,
                )
            )
        order = Order.create(
            vendor_id=request.vendor_id,
            customer_id=customer_id,
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            delivery_address=request.delivery_address,
            items=lines,
            notes=request.notes,
        )
        order.id = str(self._next_id)
        self._next_id += 1
        self._store[order.id] = order
        self.created_requests.append(request)
        return order

    async def get_by_id(self, order_id: str) -> Order:
        self.calls.append("get_by_id")
        order = self._store.get(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order

    async def list_for_customer(self, customer_id: str) -> list[Order]:
        return [o for o in self._store.values() if o.customer_id == customer_id]

    async def list_for_vendor(self, vendor_id: str) -> list[Order]:
        return [o for o in self._store.values() if o.vendor_id == vendor_id]

    async def update_status(
        self, order_id: str, expected_source: OrderStatus, target: OrderStatus
    ) -> Order:
        self.calls.append("update_status")
        order = await self.get_by_id(order_id)
        order.apply_transition(expected_source, target)
        return order

    async def cancel(
        self, order_id: str, reason: str | None, expected_source: OrderStatus
    ) -> Order:
        self.calls.append("cancel")
        order = await self.get_by_id(order_id)
        order.cancel(expected_source, reason)
        return order

    # --- Test helpers ---------------------------------------------------------

    def put(self, order: Order) -> Order:
        if order.id is None:
            order.id = str(self._next_id)
            self._next_id += 1
        self._store[order.id] = order
        return order


def make_order(
    status: OrderStatus = OrderStatus.PENDING,
    vendor_id: str = "r1",
    customer_id: str = "c1",
    order_id: str | None = None,
) -> Order:
    return Order(
        id=order_id,
        vendor_id=vendor_id,
        customer_id=customer_id,
        items=[
            OrderLineItem(
                catalog_item_id="m1",
                quantity=Quantity(2),
                price_at_order_time=Money.of("50"),
            )
        ],
        customer_name="Awa",
        customer_phone="+220 555 0101",
        delivery_address="12 Kairaba Ave",
        status=status,
    )

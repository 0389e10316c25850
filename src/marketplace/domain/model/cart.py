"""Cart aggregate — the customer's pending selection across vendors.

A single cart may hold items from several vendors at once (a restaurant
and a pharmacy in the same session). Each vendor fulfils its part
independently, so the cart can always be partitioned by vendor.

The cart is a single-writer aggregate. Readers never get references to
its internals: they take a ``CartSnapshot`` or subscribe to receive a
fresh snapshot after every mutation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from marketplace.domain.exceptions import EntityNotFoundError, ValidationError
from marketplace.domain.model.catalog import CatalogItem
from marketplace.domain.model.value_objects import (
    DEFAULT_CURRENCY,
    EntityType,
    Money,
)


@dataclass(frozen=True)
class CartLineItem:
    """One catalog item as selected by the customer.

    ``price`` is the catalog price at the moment the item was first added.
    The backend re-prices every line when the order is created.
    """

    id: str
    name: str
    price: Money
    vendor_id: str
    vendor_name: str
    entity_type: EntityType
    quantity: int = 1
    description: str | None = None
    image_url: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Cart item id is required")
        if not self.vendor_id:
            raise ValidationError(f"Cart item '{self.id}' has no vendor")
        _check_positive(self.quantity)

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity

    @staticmethod
    def from_catalog(item: CatalogItem, quantity: int = 1) -> CartLineItem:
        """Snapshot a catalog item into a cart line."""
        return CartLineItem(
            id=item.id,
            name=item.name,
            price=item.price,
            vendor_id=item.vendor_id,
            vendor_name=item.vendor_name,
            entity_type=item.entity_type,
            quantity=quantity,
            description=item.description,
            image_url=item.image_url,
        )


@dataclass(frozen=True)
class CartSnapshot:
    """Immutable view of the cart handed to presentation layers."""

    items: tuple[CartLineItem, ...]
    per_vendor_totals: Mapping[str, Money] = field(compare=False)
    grand_total: Money
    item_count: int

    @property
    def is_empty(self) -> bool:
        return not self.items


CartListener = Callable[[CartSnapshot], None]


def _check_positive(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise ValidationError(
            f"Quantity must be an integer, got {type(quantity).__name__}"
        )
    if quantity < 1:
        raise ValidationError("Quantity must be positive")


class Cart:
    """Aggregate root for the shopping cart.

    Invariants:
    - every stored line has ``quantity >= 1``; a line driven to zero is
      removed, never stored
    - a catalog id appears at most once, whatever its vendor
    - totals are derived on every read, never cached
    """

    def __init__(
        self,
        items: Iterable[CartLineItem] = (),
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._currency = currency
        self._items: dict[str, CartLineItem] = {}
        self._listeners: list[CartListener] = []
        for item in items:
            if item.id in self._items:
                raise ValidationError(f"Duplicate cart item '{item.id}'")
            self._items[item.id] = item

    # --- Mutations ------------------------------------------------------------

    def add_item(self, item: CartLineItem, quantity: int | None = None) -> CartLineItem:
        """Add ``item`` or bump its quantity if the id is already present.

        The delta is ``quantity`` when given, otherwise ``item.quantity``
        (1 for a freshly built line).
        """
        delta = item.quantity if quantity is None else quantity
        _check_positive(delta)

        existing = self._items.get(item.id)
        if existing is None:
            stored = replace(item, quantity=delta)
        else:
            if existing.vendor_id != item.vendor_id:
                raise ValidationError(
                    f"Item '{item.id}' is already in the cart for vendor "
                    f"'{existing.vendor_id}', not '{item.vendor_id}'"
                )
            stored = replace(existing, quantity=existing.quantity + delta)

        self._items[item.id] = stored
        self._publish()
        return stored

    def remove_item(self, item_id: str) -> None:
        """Delete a line unconditionally. Unknown ids are ignored."""
        if self._items.pop(item_id, None) is not None:
            self._publish()

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(item_id)
            return

        existing = self._items.get(item_id)
        if existing is None:
            raise EntityNotFoundError(f"Item '{item_id}' is not in the cart")
        _check_positive(quantity)
        self._items[item_id] = replace(existing, quantity=quantity)
        self._publish()

    def clear(self) -> None:
        """Empty the cart. Only called after a fully successful checkout."""
        if self._items:
            self._items.clear()
            self._publish()

    # --- Queries --------------------------------------------------------------

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return tuple(self._items.values())

    @property
    def currency(self) -> str:
        return self._currency

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def get_quantity(self, item_id: str) -> int:
        item = self._items.get(item_id)
        return item.quantity if item is not None else 0

    def get_total_quantity(self) -> int:
        return sum(item.quantity for item in self._items.values())

    def get_total_amount(self) -> Money:
        total = Money.zero(self._currency)
        for item in self._items.values():
            total = total + item.line_total
        return total

    def get_cart_by_vendor(self) -> dict[str, list[CartLineItem]]:
        """Partition lines by vendor, vendors in first-seen order."""
        grouped: dict[str, list[CartLineItem]] = {}
        for item in self._items.values():
            grouped.setdefault(item.vendor_id, []).append(item)
        return grouped

    def vendors(self) -> list[tuple[str, str]]:
        """``(vendor_id, vendor_name)`` for every vendor in the cart."""
        return [
            (vendor_id, lines[0].vendor_name)
            for vendor_id, lines in self.get_cart_by_vendor().items()
        ]

    def for_vendors(self, vendor_ids: Iterable[str]) -> Cart:
        """A detached cart holding only the lines of ``vendor_ids``."""
        wanted = set(vendor_ids)
        return Cart(
            (item for item in self._items.values() if item.vendor_id in wanted),
            self._currency,
        )

    def per_vendor_totals(self) -> dict[str, Money]:
        totals: dict[str, Money] = {}
        for vendor_id, lines in self.get_cart_by_vendor().items():
            subtotal = Money.zero(self._currency)
            for line in lines:
                subtotal = subtotal + line.line_total
            totals[vendor_id] = subtotal
        return totals

    # --- Snapshots & subscribers ----------------------------------------------

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot(
            items=self.items,
            per_vendor_totals=MappingProxyType(self.per_vendor_totals()),
            grand_total=self.get_total_amount(),
            item_count=self.get_total_quantity(),
        )

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register ``listener`` for snapshots; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

"""JSON-file-backed implementation of CartRepository.

One file holds the single session cart, lines in insertion order.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from marketplace.domain.model.cart import Cart, CartLineItem
from marketplace.domain.model.value_objects import EntityType, Money
from marketplace.domain.repository.cart_repository import CartRepository


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path, currency: str) -> None:
        self._file_path = file_path
        self._currency = currency
        self._ensure_file()

    # --- CartRepository interface ---------------------------------------------

    def load(self) -> Cart:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return Cart(
            items=[self._to_domain(line) for line in raw],
            currency=self._currency,
        )

    def save(self, cart: Cart) -> None:
        raw = [self._to_raw(line) for line in cart.items]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: CartLineItem) -> dict:
        return {
            "id": line.id,
            "name": line.name,
            "price": str(line.price.amount),
            "currency": line.price.currency,
            "quantity": line.quantity,
            "vendor_id": line.vendor_id,
            "vendor_name": line.vendor_name,
            "entity_type": line.entity_type.value,
            "description": line.description,
            "image_url": line.image_url,
        }

    def _to_domain(self, raw: dict) -> CartLineItem:
        return CartLineItem(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", self._currency)),
            quantity=raw["quantity"],
            vendor_id=raw["vendor_id"],
            vendor_name=raw.get("vendor_name", raw["vendor_id"]),
            entity_type=EntityType(raw["entity_type"]),
            description=raw.get("description"),
            image_url=raw.get("image_url"),
        )

    # --- File helpers ---------------------------------------------------------

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")

"""JSON-file-backed implementation of CatalogRepository."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from marketplace.domain.model.catalog import CatalogItem
from marketplace.domain.model.value_objects import DEFAULT_CURRENCY, EntityType, Money
from marketplace.domain.repository.catalog_repository import CatalogRepository


class JsonCatalogRepository(CatalogRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CatalogRepository interface ------------------------------------------

    def get_by_id(self, item_id: str) -> CatalogItem | None:
        return self._load().get(item_id)

    def list_all(self) -> list[CatalogItem]:
        return list(self._load().values())

    def list_for_vendor(self, vendor_id: str) -> list[CatalogItem]:
        return [i for i in self._load().values() if i.vendor_id == vendor_id]

    def save(self, item: CatalogItem) -> None:
        items = self._load()
        items[item.id] = item
        self._persist(items)

    def delete(self, item_id: str) -> None:
        items = self._load()
        if items.pop(item_id, None) is not None:
            self._persist(items)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, CatalogItem]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {
            entry["id"]: CatalogItem(
                id=entry["id"],
                name=entry["name"],
                price=Money(
                    Decimal(entry["price"]), entry.get("currency", DEFAULT_CURRENCY)
                ),
                vendor_id=entry["vendor_id"],
                vendor_name=entry.get("vendor_name", entry["vendor_id"]),
                entity_type=EntityType(entry.get("entity_type", "restaurant")),
                description=entry.get("description"),
                image_url=entry.get("image_url"),
            )
            for entry in raw
        }

    def _persist(self, items: dict[str, CatalogItem]) -> None:
        raw = [
            {
                "id": i.id,
                "name": i.name,
                "price": str(i.price.amount),
                "currency": i.price.currency,
                "vendor_id": i.vendor_id,
                "vendor_name": i.vendor_name,
                "entity_type": i.entity_type.value,
                "description": i.description,
                "image_url": i.image_url,
            }
            for i in items.values()
        ]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")

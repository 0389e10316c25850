"""Application service: Add Catalog Item use case."""

from __future__ import annotations

from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.catalog import CatalogItem
from marketplace.domain.model.value_objects import EntityType, Money
from marketplace.domain.repository.catalog_repository import CatalogRepository


class AddCatalogItemHandler:

    def __init__(self, catalog_repo: CatalogRepository, currency: str) -> None:
        self._catalog_repo = catalog_repo
        self._currency = currency

    def handle(
        self,
        item_id: str,
        name: str,
        price: str,
        vendor_id: str,
        vendor_name: str,
        entity_type: str,
        description: str | None = None,
    ) -> CatalogItem:
        """Add a new item to a vendor's catalog."""
        if not item_id or not item_id.strip():
            raise ValidationError("Catalog item id is required")
        if not name or not name.strip():
            raise ValidationError("Catalog item name is required")
        if not vendor_id or not vendor_id.strip():
            raise ValidationError("Vendor id is required")

        if self._catalog_repo.get_by_id(item_id) is not None:
            raise ValidationError(f"Catalog item '{item_id}' already exists")

        try:
            kind = EntityType(entity_type.lower())
        except ValueError as exc:
            raise ValidationError(
                f"Unknown vendor type '{entity_type}' "
                f"(expected one of: {', '.join(t.value for t in EntityType)})"
            ) from exc

        money = Money.of(price, self._currency)
        if money.amount <= 0:
            raise ValidationError("Catalog price must be greater than zero")

        item = CatalogItem(
            id=item_id.strip(),
            name=name.strip(),
            price=money,
            vendor_id=vendor_id.strip(),
            vendor_name=(vendor_name or vendor_id).strip(),
            entity_type=kind,
            description=description,
        )
        self._catalog_repo.save(item)
        return item

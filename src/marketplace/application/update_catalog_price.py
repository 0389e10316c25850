"""Application service: Update Catalog Price use case."""

from __future__ import annotations

from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.model.value_objects import Money
from marketplace.domain.repository.catalog_repository import CatalogRepository


class UpdateCatalogPriceHandler:

    def __init__(self, catalog_repo: CatalogRepository) -> None:
        self._catalog_repo = catalog_repo

    def handle(self, item_id: str, new_price: str) -> None:
        """Update a catalog item's price.

        This does NOT affect any existing orders — they captured a
        price snapshot at creation time.
        """
        item = self._catalog_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Catalog item '{item_id}' not found")

        item.update_price(Money.of(new_price, item.price.currency))
        self._catalog_repo.save(item)

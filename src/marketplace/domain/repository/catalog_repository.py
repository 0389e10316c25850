"""Abstract repository for CatalogItem aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.model.catalog import CatalogItem


class CatalogRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: str) -> CatalogItem | None:
        """Return a catalog item by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[CatalogItem]:
        """Return every catalog item."""

    @abstractmethod
    def list_for_vendor(self, vendor_id: str) -> list[CatalogItem]:
        """Return the catalog items of one vendor."""

    @abstractmethod
    def save(self, item: CatalogItem) -> None:
        """Persist a new or updated catalog item."""

    @abstractmethod
    def delete(self, item_id: str) -> None:
        """Remove a catalog item. Unknown ids are ignored."""

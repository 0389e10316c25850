"""Application service: Remove Catalog Item use case."""

from __future__ import annotations

import structlog

from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.repository.catalog_repository import CatalogRepository

logger = structlog.get_logger(__name__)


class RemoveCatalogItemHandler:

    def __init__(self, catalog_repo: CatalogRepository) -> None:
        self._catalog_repo = catalog_repo

    def handle(self, item_id: str) -> None:
        """Take an item off its vendor's catalog.

        Carts and orders holding the item keep their own copy of it.
        """
        if self._catalog_repo.get_by_id(item_id) is None:
            raise EntityNotFoundError(f"Catalog item '{item_id}' not found")

        self._catalog_repo.delete(item_id)
        logger.info("Catalog item removed", item_id=item_id)

"""Application service: Add To Cart use case."""

from __future__ import annotations

import structlog

from marketplace.application.dto import CartDTO, cart_to_dto
from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.model.cart import CartLineItem
from marketplace.domain.model.checkout import FeeSchedule
from marketplace.domain.repository.cart_repository import CartRepository
from marketplace.domain.repository.catalog_repository import CatalogRepository
from marketplace.domain.service.order_splitter import quote_checkout

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        catalog_repo: CatalogRepository,
        fees: FeeSchedule,
    ) -> None:
        self._cart_repo = cart_repo
        self._catalog_repo = catalog_repo
        self._fees = fees

    def handle(self, item_id: str, quantity: int = 1) -> CartDTO:
        """Add a catalog item to the cart.

        The catalog price is snapshotted into the cart line now; later
        catalog price changes do not touch lines already in the cart.
        """
        item = self._catalog_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Catalog item '{item_id}' not found")

        cart = self._cart_repo.load()
        line = cart.add_item(CartLineItem.from_catalog(item), quantity)
        self._cart_repo.save(cart)

        logger.debug(
            "Item added to cart",
            item_id=item_id,
            vendor_id=item.vendor_id,
            quantity=line.quantity,
        )
        return cart_to_dto(cart.snapshot(), quote_checkout(cart, self._fees))

"""Application service: change or drop a cart line."""

from __future__ import annotations

from marketplace.application.dto import CartDTO, cart_to_dto
from marketplace.domain.model.checkout import FeeSchedule
from marketplace.domain.repository.cart_repository import CartRepository
from marketplace.domain.service.order_splitter import quote_checkout


class UpdateCartItemHandler:

    def __init__(self, cart_repo: CartRepository, fees: FeeSchedule) -> None:
        self._cart_repo = cart_repo
        self._fees = fees

    def handle(self, item_id: str, quantity: int) -> CartDTO:
        """Set a line's quantity. Zero or less removes the line."""
        cart = self._cart_repo.load()
        cart.update_quantity(item_id, quantity)
        self._cart_repo.save(cart)
        return cart_to_dto(cart.snapshot(), quote_checkout(cart, self._fees))


class RemoveCartItemHandler:

    def __init__(self, cart_repo: CartRepository, fees: FeeSchedule) -> None:
        self._cart_repo = cart_repo
        self._fees = fees

    def handle(self, item_id: str) -> CartDTO:
        cart = self._cart_repo.load()
        cart.remove_item(item_id)
        self._cart_repo.save(cart)
        return cart_to_dto(cart.snapshot(), quote_checkout(cart, self._fees))

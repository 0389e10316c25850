"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from marketplace.application.dto import CartDTO, cart_to_dto
from marketplace.domain.model.checkout import FeeSchedule
from marketplace.domain.repository.cart_repository import CartRepository
from marketplace.domain.service.order_splitter import quote_checkout


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository, fees: FeeSchedule) -> None:
        self._cart_repo = cart_repo
        self._fees = fees

    def handle(self) -> CartDTO:
        cart = self._cart_repo.load()
        return cart_to_dto(cart.snapshot(), quote_checkout(cart, self._fees))

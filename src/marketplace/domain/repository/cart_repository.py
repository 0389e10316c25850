"""Abstract repository for the Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def load(self) -> Cart:
        """Return the session's cart (empty if none was saved)."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist the cart's current lines."""

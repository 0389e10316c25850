"""Abstract key-value cache for the customer's profile fields."""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.model.profile import PROFILE_KEYS, Profile


class ProfileCache(ABC):
    """Simple read/write of ``name``, ``phone``, ``email`` and ``address``.

    Last write wins; there is no merge.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the cached value for ``key``, or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Overwrite ``key`` with ``value``."""

    def load(self) -> Profile:
        return Profile(**{key: self.get(key) for key in PROFILE_KEYS})

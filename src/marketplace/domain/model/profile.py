"""Customer profile remembered between checkouts."""

from __future__ import annotations

from dataclasses import dataclass

PROFILE_KEYS = ("name", "phone", "email", "address")


@dataclass(frozen=True)
class Profile:
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None

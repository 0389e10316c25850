"""Order status and actor role enumerations."""

from __future__ import annotations

from enum import Enum

# Older backend builds report the preparing phase as PROCESSING.
_STATUS_ALIASES = {"PROCESSING": "PREPARING"}


class OrderStatus(Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    PREPARING = "PREPARING"
    READY = "READY"
    DISPATCHED = "DISPATCHED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @classmethod
    def _missing_(cls, value: object) -> OrderStatus | None:
        if isinstance(value, str):
            key = value.strip().upper()
            key = _STATUS_ALIASES.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        return None

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


class ActorRole(Enum):
    """Who is asking for a status change."""

    CUSTOMER = "customer"
    VENDOR = "vendor"
    DRIVER = "driver"

    @classmethod
    def _missing_(cls, value: object) -> ActorRole | None:
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        return None

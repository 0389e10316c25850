"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers and
the only place that reads settings. Every other module depends only on
abstractions.
"""

from __future__ import annotations

from functools import lru_cache

import pydantic

from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.checkout import FeeSchedule
from marketplace.domain.repository.order_backend import OrderBackend
from marketplace.infrastructure.config import Settings
from marketplace.infrastructure.http.http_order_backend import HttpOrderBackend
from marketplace.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from marketplace.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)
from marketplace.infrastructure.persistence.json_order_backend import (
    JsonOrderBackend,
)
from marketplace.infrastructure.persistence.json_profile_cache import (
    JsonProfileCache,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    try:
        return Settings()
    except pydantic.ValidationError as exc:
        problems = "; ".join(
            f"MARKETPLACE_{'_'.join(str(p) for p in error['loc']).upper()}: {error['msg']}"
            for error in exc.errors()
        )
        raise ValidationError(f"Invalid configuration: {problems}") from exc


def fee_schedule() -> FeeSchedule:
    return settings().fee_schedule


def customer_id() -> str:
    return settings().customer_id


def catalog_repository() -> JsonCatalogRepository:
    return JsonCatalogRepository(settings().data_dir / "catalog.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(settings().data_dir / "cart.json", settings().currency)


def profile_cache() -> JsonProfileCache:
    return JsonProfileCache(settings().data_dir / "profile.json")


def order_backend() -> OrderBackend:
    """The remote API when one is configured, the local JSON store otherwise."""
    cfg = settings()
    if cfg.api_url:
        return HttpOrderBackend(
            base_url=cfg.api_url,
            token=cfg.api_token,
            timeout=cfg.http_timeout,
            currency=cfg.currency,
        )
    return JsonOrderBackend(cfg.data_dir / "orders.json", catalog_repository())

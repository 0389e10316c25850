"""Runtime settings, read from ``MARKETPLACE_*`` environment variables or a ``.env`` file."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from marketplace.domain.model.checkout import FeeSchedule
from marketplace.domain.model.value_objects import DEFAULT_CURRENCY, Money


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MARKETPLACE_",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    data_dir: Path = Path("data")
    api_url: str | None = None
    api_token: str | None = None
    customer_id: str = "local-customer"
    currency: str = DEFAULT_CURRENCY
    delivery_fee: Decimal = Field(default=Decimal("300"), ge=0)
    service_fee: Decimal = Field(default=Decimal("25"), ge=0)
    fees_per_vendor: bool = False
    http_timeout: float = Field(default=10.0, gt=0)

    @property
    def fee_schedule(self) -> FeeSchedule:
        return FeeSchedule(
            delivery_fee=Money.of(self.delivery_fee, self.currency),
            service_fee=Money.of(self.service_fee, self.currency),
            per_vendor=self.fees_per_vendor,
        )

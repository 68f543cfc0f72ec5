"""
Settings — environment-driven configuration.

    from storefront.config import get_settings

    settings = get_settings()          # reads STOREFRONT_* env vars
    settings.payment_timeout_seconds   # 30.0
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorefrontSettings(BaseSettings):
    # Pricing
    tax_rate: Decimal = Field(default=Decimal("0.08"), ge=0)
    shipping_flat_rate: Decimal = Field(default=Decimal("9.99"), ge=0)
    free_shipping_threshold: Decimal = Field(default=Decimal("100"), ge=0)

    # Payment
    payment_timeout_seconds: float = Field(default=30.0, gt=0)
    simulated_payment_delay_seconds: float = Field(default=2.0, ge=0)

    # Logging
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    model_config = SettingsConfigDict(env_prefix="STOREFRONT_", env_file=None, extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> StorefrontSettings:
    """Process-wide settings, read once."""
    return StorefrontSettings()


__all__ = ("StorefrontSettings", "get_settings")

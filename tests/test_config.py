from decimal import Decimal

import pytest
from pydantic import ValidationError

from storefront import checkout as X
from storefront import pricing as P
from storefront.config import StorefrontSettings, get_settings


def test_defaults():
    settings = StorefrontSettings()

    assert settings.tax_rate == Decimal("0.08")
    assert settings.shipping_flat_rate == Decimal("9.99")
    assert settings.free_shipping_threshold == Decimal("100")
    assert settings.payment_timeout_seconds == 30.0
    assert settings.log_format == "console"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("STOREFRONT_TAX_RATE", "0.2")
    monkeypatch.setenv("STOREFRONT_PAYMENT_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("STOREFRONT_LOG_FORMAT", "json")

    settings = StorefrontSettings()

    assert settings.tax_rate == Decimal("0.2")
    assert settings.payment_timeout_seconds == 5.0
    assert settings.log_format == "json"


def test_non_positive_timeout_is_rejected():
    with pytest.raises(ValidationError):
        StorefrontSettings(payment_timeout_seconds=0)


def test_get_settings_is_cached():
    get_settings.cache_clear()

    assert get_settings() is get_settings()


@pytest.mark.asyncio
async def test_process_from_settings_uses_configured_rules(two_item_cart):
    settings = StorefrontSettings(
        tax_rate=Decimal("0"),
        shipping_flat_rate=Decimal("0"),
        simulated_payment_delay_seconds=0,
    )
    gateway = X.SimulatedGateway.from_settings(settings)
    process = X.CheckoutProcess.from_settings(gateway, settings)

    session = process.open(two_item_cart).value

    assert session.pricing == P.PricingBreakdown(
        subtotal=Decimal("1699.97"),
        tax=Decimal("0"),
        shipping=Decimal("0"),
        total=Decimal("1699.97"),
    )
    assert gateway.delay == 0

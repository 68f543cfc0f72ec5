"""
Pricing — subtotal, tax, shipping and total of a cart snapshot.

    from storefront import pricing as P

    b = P.breakdown(cart.line_items())
    P.format_money(b.total)    # "$1,835.97"
"""

from __future__ import annotations

from storefront.pricing._money import (
    CENT,
    ZERO,
    to_display,
    format_money,
    shipping_label,
)
from storefront.pricing._engine import (
    TAX_RATE,
    SHIPPING_FLAT_RATE,
    FREE_SHIPPING_THRESHOLD,
    PricingRules,
    DEFAULT_RULES,
    PricingBreakdown,
    subtotal,
    tax,
    shipping,
    total,
    breakdown,
)

__all__ = (
    "CENT",
    "ZERO",
    "to_display",
    "format_money",
    "shipping_label",
    "TAX_RATE",
    "SHIPPING_FLAT_RATE",
    "FREE_SHIPPING_THRESHOLD",
    "PricingRules",
    "DEFAULT_RULES",
    "PricingBreakdown",
    "subtotal",
    "tax",
    "shipping",
    "total",
    "breakdown",
)

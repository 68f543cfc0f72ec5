"""
Pricing — pure functions from line items to a breakdown.

Nothing is cached: every call recomputes from the line items it is given.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from storefront.cart import CartLineItem
from storefront.config import StorefrontSettings
from storefront.pricing._money import ZERO, to_display

TAX_RATE = Decimal("0.08")
SHIPPING_FLAT_RATE = Decimal("9.99")
FREE_SHIPPING_THRESHOLD = Decimal("100")

# ═══════════════════════════════════════════════════════════════════════════════
# Rules
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class PricingRules:
    """Tax and shipping parameters. Shipping is free strictly above the threshold."""

    tax_rate: Decimal = TAX_RATE
    shipping_flat_rate: Decimal = SHIPPING_FLAT_RATE
    free_shipping_threshold: Decimal = FREE_SHIPPING_THRESHOLD

    @staticmethod
    def from_settings(settings: StorefrontSettings) -> PricingRules:
        return PricingRules(
            tax_rate=settings.tax_rate,
            shipping_flat_rate=settings.shipping_flat_rate,
            free_shipping_threshold=settings.free_shipping_threshold,
        )


DEFAULT_RULES = PricingRules()

# ═══════════════════════════════════════════════════════════════════════════════
# Breakdown
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class PricingBreakdown:
    """Exact amounts. Use rounded() for display."""

    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal

    @property
    def is_free_shipping(self) -> bool:
        return self.shipping == ZERO

    def rounded(self) -> PricingBreakdown:
        """
        Cent-rounded copy for rendering.

        Each field is rounded independently, so the rounded parts may not
        add up to the rounded total.
        """
        return PricingBreakdown(
            subtotal=to_display(self.subtotal),
            tax=to_display(self.tax),
            shipping=to_display(self.shipping),
            total=to_display(self.total),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Operations
# ═══════════════════════════════════════════════════════════════════════════════


def subtotal(line_items: Iterable[CartLineItem]) -> Decimal:
    """Σ price × quantity. 0 for an empty cart."""
    return sum((item.line_total for item in line_items), ZERO)


def tax(subtotal: Decimal, rules: PricingRules = DEFAULT_RULES) -> Decimal:
    return subtotal * rules.tax_rate


def shipping(subtotal: Decimal, rules: PricingRules = DEFAULT_RULES) -> Decimal:
    """Free only when subtotal > threshold; exactly 100 still pays."""
    if subtotal > rules.free_shipping_threshold:
        return ZERO
    return rules.shipping_flat_rate


def total(subtotal: Decimal, tax: Decimal, shipping: Decimal) -> Decimal:
    return subtotal + tax + shipping


def breakdown(
    line_items: Iterable[CartLineItem],
    rules: PricingRules = DEFAULT_RULES,
) -> PricingBreakdown:
    """
    Full breakdown of a cart snapshot.

    Example:
        >>> b = breakdown(cart.line_items())
        >>> b.total, b.rounded().total
        (Decimal('1835.9676'), Decimal('1835.97'))
    """
    sub = subtotal(line_items)
    tax_amount = tax(sub, rules)
    shipping_amount = shipping(sub, rules)
    return PricingBreakdown(
        subtotal=sub,
        tax=tax_amount,
        shipping=shipping_amount,
        total=total(sub, tax_amount, shipping_amount),
    )


__all__ = (
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

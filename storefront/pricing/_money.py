"""
Money — Decimal helpers for the display boundary.

Arithmetic stays exact everywhere else; rounding happens only here.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_display(amount: Decimal) -> Decimal:
    """Round to cents, half up. 135.9976 → 136.00"""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal) -> str:
    """Dollar string for rendering. 1835.9676 → "$1,835.97" """
    return f"${to_display(amount):,.2f}"


def shipping_label(amount: Decimal) -> str:
    """"Free" for zero shipping, the dollar amount otherwise."""
    return "Free" if amount == ZERO else format_money(amount)


__all__ = ("CENT", "ZERO", "to_display", "format_money", "shipping_label")

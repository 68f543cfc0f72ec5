"""
Core types for storefront.

Re-exports from kungfu + shared aliases.
"""

from __future__ import annotations

from collections.abc import Callable

# Re-export from kungfu
from kungfu import Result, Ok, Error, Option, Some, Nothing

# ═══════════════════════════════════════════════════════════════════════════════
# Identity
# ═══════════════════════════════════════════════════════════════════════════════

type ProductId = str
"""Catalog identity of a product. Also the cart key."""

# ═══════════════════════════════════════════════════════════════════════════════
# Listener
# ═══════════════════════════════════════════════════════════════════════════════

type Unsubscribe = Callable[[], None]
"""Detaches a previously registered listener."""

# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "Option",
    "Some",
    "Nothing",
    # Aliases
    "ProductId",
    "Unsubscribe",
)

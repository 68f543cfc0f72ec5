"""
Cart — line items and quantity operations.

    from storefront import cart as B

    store = B.CartStore()
    store.add_item(product)
    store.item_count()
"""

from __future__ import annotations

from storefront.cart._types import (
    CartLineItem,
    RejectionKind,
    CartRejection,
    CartEventKind,
    CartEvent,
    CartListener,
    CartInvariantError,
)
from storefront.cart._store import CartStore

__all__ = (
    "CartLineItem",
    "RejectionKind",
    "CartRejection",
    "CartEventKind",
    "CartEvent",
    "CartListener",
    "CartInvariantError",
    "CartStore",
)

"""
Cart types — line items, rejections, change events.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto

from storefront._types import ProductId
from storefront.catalog import Product

# ═══════════════════════════════════════════════════════════════════════════════
# Line Item
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CartLineItem:
    """
    One product's aggregated quantity within a cart.

    Frozen: a quantity change replaces the line item, so snapshots handed
    out earlier never change under the reader.
    """

    product: Product
    quantity: int

    @property
    def product_id(self) -> ProductId:
        return self.product.id

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity

    def with_quantity(self, quantity: int) -> CartLineItem:
        return CartLineItem(product=self.product, quantity=quantity)


# ═══════════════════════════════════════════════════════════════════════════════
# Rejection — Mutation Refused, Cart Unchanged
# ═══════════════════════════════════════════════════════════════════════════════


class RejectionKind(Enum):
    """Why a cart mutation was refused."""

    OUT_OF_STOCK = auto()
    NOT_IN_CART = auto()


@dataclass(frozen=True, slots=True)
class CartRejection:
    """
    A refused mutation.

    Returned as a value: it reflects a stale UI affordance, not a bug.
    """

    kind: RejectionKind
    product_id: ProductId
    message: str

    @staticmethod
    def out_of_stock(product: Product) -> CartRejection:
        return CartRejection(
            RejectionKind.OUT_OF_STOCK,
            product.id,
            f"{product.name} is out of stock.",
        )

    @staticmethod
    def not_in_cart(product_id: ProductId) -> CartRejection:
        return CartRejection(
            RejectionKind.NOT_IN_CART,
            product_id,
            f"Product {product_id} is not in the cart.",
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Events — Applied Mutations
# ═══════════════════════════════════════════════════════════════════════════════


class CartEventKind(Enum):
    ADDED = auto()
    UPDATED = auto()
    REMOVED = auto()
    CLEARED = auto()


@dataclass(frozen=True, slots=True)
class CartEvent:
    """
    An applied mutation.

    quantity is the line's quantity after the change (0 once removed).
    product_id is None for CLEARED.
    """

    kind: CartEventKind
    product_id: ProductId | None
    quantity: int
    item_count: int


type CartListener = Callable[[CartEvent], None]

# ═══════════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════════


class CartInvariantError(RuntimeError):
    """Cart internal state is inconsistent. Always a bug, never recoverable."""


__all__ = (
    "CartLineItem",
    "RejectionKind",
    "CartRejection",
    "CartEventKind",
    "CartEvent",
    "CartListener",
    "CartInvariantError",
)

"""
CartStore — sole owner of the mutable cart.
"""

from __future__ import annotations

import threading

from storefront._log import get_logger
from storefront._types import (
    Result,
    Ok,
    Error,
    Option,
    Some,
    Nothing,
    ProductId,
    Unsubscribe,
)
from storefront.catalog import Product
from storefront.cart._types import (
    CartLineItem,
    CartRejection,
    CartEvent,
    CartEventKind,
    CartListener,
    CartInvariantError,
)

log = get_logger("cart")


class CartStore:
    """
    Mutable cart of one shopper session.

    Line items are keyed by product id in insertion order. Every operation
    runs under one re-entrant lock, so callers on any thread see mutations
    applied whole and in call order.

    Example:
        cart = CartStore()
        cart.add_item(laptop)              # Ok(CartLineItem(laptop, 1))
        cart.add_item(laptop)              # Ok(CartLineItem(laptop, 2))
        cart.add_item(desk_lamp)           # Error(OUT_OF_STOCK), cart unchanged
        cart.set_quantity(laptop.id, 0)    # Ok(Nothing()), line removed
    """

    def __init__(self) -> None:
        self._items: dict[ProductId, CartLineItem] = {}
        self._listeners: list[CartListener] = []
        self._lock = threading.RLock()

    # ───────────────────────────────────────────────────────────────────────────
    # Mutations
    # ───────────────────────────────────────────────────────────────────────────

    def add_item(self, product: Product) -> Result[CartLineItem, CartRejection]:
        """Add one unit; merges into the existing line item."""
        if not product.in_stock:
            log.info("cart.add_rejected", product_id=product.id, reason="out_of_stock")
            return Error(CartRejection.out_of_stock(product))

        with self._lock:
            existing = self._items.get(product.id)
            if existing is None:
                item = CartLineItem(product=product, quantity=1)
                kind = CartEventKind.ADDED
            else:
                item = existing.with_quantity(existing.quantity + 1)
                kind = CartEventKind.UPDATED
            self._items[product.id] = item
            self._commit(kind, product.id, item.quantity)

        log.info("cart.item_added", product_id=product.id, quantity=item.quantity)
        return Ok(item)

    def remove_item(self, product_id: ProductId) -> Option[CartLineItem]:
        """Delete the line item. Returns the removed line, Nothing if absent."""
        with self._lock:
            removed = self._items.pop(product_id, None)
            if removed is None:
                return Nothing()
            self._commit(CartEventKind.REMOVED, product_id, 0)

        log.info("cart.item_removed", product_id=product_id)
        return Some(removed)

    def set_quantity(
        self,
        product_id: ProductId,
        quantity: int,
    ) -> Result[Option[CartLineItem], CartRejection]:
        """
        Set an existing line item's quantity.

        quantity <= 0 removes the line (Ok(Nothing())). Never adds a product:
        an absent line is rejected with NOT_IN_CART. A non-int quantity
        raises TypeError.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError(f"Quantity must be an int, got {type(quantity).__name__}")
        if quantity <= 0:
            self.remove_item(product_id)
            return Ok(Nothing())

        with self._lock:
            existing = self._items.get(product_id)
            if existing is None:
                return Error(CartRejection.not_in_cart(product_id))
            if existing.quantity == quantity:
                return Ok(Some(existing))
            item = existing.with_quantity(quantity)
            self._items[product_id] = item
            self._commit(CartEventKind.UPDATED, product_id, quantity)

        log.info("cart.quantity_set", product_id=product_id, quantity=quantity)
        return Ok(Some(item))

    def increment(self, product_id: ProductId) -> Result[Option[CartLineItem], CartRejection]:
        """Quantity + 1 on an existing line."""
        with self._lock:
            existing = self._items.get(product_id)
            if existing is None:
                return Error(CartRejection.not_in_cart(product_id))
            return self.set_quantity(product_id, existing.quantity + 1)

    def decrement(self, product_id: ProductId) -> Result[Option[CartLineItem], CartRejection]:
        """Quantity - 1 on an existing line; from 1 the line is removed."""
        with self._lock:
            existing = self._items.get(product_id)
            if existing is None:
                return Error(CartRejection.not_in_cart(product_id))
            return self.set_quantity(product_id, existing.quantity - 1)

    def clear(self) -> None:
        """Remove every line item."""
        with self._lock:
            if not self._items:
                return
            self._items.clear()
            self._commit(CartEventKind.CLEARED, None, 0)

        log.info("cart.cleared")

    # ───────────────────────────────────────────────────────────────────────────
    # Queries
    # ───────────────────────────────────────────────────────────────────────────

    def line_items(self) -> tuple[CartLineItem, ...]:
        """Snapshot of the current line items in insertion order."""
        with self._lock:
            return tuple(self._items.values())

    def item_count(self) -> int:
        """Sum of quantities over all line items."""
        with self._lock:
            return sum(item.quantity for item in self._items.values())

    def get(self, product_id: ProductId) -> Option[CartLineItem]:
        with self._lock:
            item = self._items.get(product_id)
        return Some(item) if item is not None else Nothing()

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    # ───────────────────────────────────────────────────────────────────────────
    # Listeners
    # ───────────────────────────────────────────────────────────────────────────

    def subscribe(self, listener: CartListener) -> Unsubscribe:
        """
        Call listener after every applied mutation.

        Rejected mutations and no-ops are not reported. An exception raised
        by the listener is logged and does not reach the caller.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ───────────────────────────────────────────────────────────────────────────
    # Internals
    # ───────────────────────────────────────────────────────────────────────────

    def _commit(self, kind: CartEventKind, product_id: ProductId | None, quantity: int) -> None:
        """Check invariants, then notify listeners. Caller holds the lock."""
        self._check_invariants()
        event = CartEvent(
            kind=kind,
            product_id=product_id,
            quantity=quantity,
            item_count=sum(item.quantity for item in self._items.values()),
        )
        for listener in tuple(self._listeners):
            try:
                listener(event)
            except Exception:
                # The mutation is already applied; a listener cannot undo it
                log.exception("cart.listener_failed", kind=kind.name, product_id=product_id)

    def _check_invariants(self) -> None:
        for key, item in self._items.items():
            if item.product_id != key:
                raise CartInvariantError(
                    f"Line item for {item.product_id} stored under key {key}"
                )
            if item.quantity < 1:
                raise CartInvariantError(
                    f"Line item {key} persisted with quantity {item.quantity}"
                )


__all__ = ("CartStore",)

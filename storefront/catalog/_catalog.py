"""
ProductCatalog — the immutable product list of one session.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from storefront._log import get_logger
from storefront._types import Option, Some, Nothing, ProductId
from storefront.catalog._types import (
    ALL_CATEGORIES,
    CatalogError,
    Product,
    ProductRecord,
)

log = get_logger("catalog")


class ProductCatalog:
    """
    Ordered, read-only collection of products.

    Populated once at session start; there are no mutation operations.

    Example:
        catalog = ProductCatalog.from_records(fixture)
        catalog.categories()                 # ("all", "electronics", "home")
        catalog.list_by_category("home")     # (Coffee Maker, Desk Lamp)
    """

    __slots__ = ("_products", "_by_id")

    def __init__(self, products: Iterable[Product]) -> None:
        ordered = tuple(products)
        by_id: dict[ProductId, Product] = {}
        for product in ordered:
            if product.id in by_id:
                raise CatalogError(f"Duplicate product id: {product.id}")
            by_id[product.id] = product
        self._products = ordered
        self._by_id = by_id

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> ProductCatalog:
        """Validate raw records from the data source and build a catalog."""
        products: list[Product] = []
        for index, raw in enumerate(records):
            try:
                products.append(ProductRecord.model_validate(raw).to_product())
            except ValidationError as e:
                raise CatalogError(f"Invalid product record #{index}: {e}") from e

        catalog = cls(products)
        log.info(
            "catalog.loaded",
            products=len(catalog),
            categories=len(catalog.categories()) - 1,
        )
        return catalog

    # ───────────────────────────────────────────────────────────────────────────
    # Queries
    # ───────────────────────────────────────────────────────────────────────────

    def list(self) -> tuple[Product, ...]:
        """All products in catalog order."""
        return self._products

    def list_by_category(self, category: str) -> tuple[Product, ...]:
        """Products whose category matches exactly; "all" matches everything."""
        if category == ALL_CATEGORIES:
            return self._products
        return tuple(p for p in self._products if p.category == category)

    def categories(self) -> tuple[str, ...]:
        """Distinct categories in first-seen order, "all" first."""
        seen: dict[str, None] = {ALL_CATEGORIES: None}
        for product in self._products:
            seen.setdefault(product.category, None)
        return tuple(seen)

    def get(self, product_id: ProductId) -> Option[Product]:
        product = self._by_id.get(product_id)
        return Some(product) if product is not None else Nothing()

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._by_id


__all__ = ("ProductCatalog",)

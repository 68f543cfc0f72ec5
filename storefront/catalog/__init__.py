"""
Catalog — the session's product list.

    from storefront import catalog as K

    products = K.sample_catalog()
    products.list_by_category("electronics")
"""

from __future__ import annotations

from storefront.catalog._types import (
    ALL_CATEGORIES,
    Product,
    ProductRecord,
    CatalogError,
)
from storefront.catalog._catalog import ProductCatalog
from storefront.catalog._fixtures import SAMPLE_PRODUCTS, sample_catalog

__all__ = (
    "ALL_CATEGORIES",
    "Product",
    "ProductRecord",
    "CatalogError",
    "ProductCatalog",
    "SAMPLE_PRODUCTS",
    "sample_catalog",
)

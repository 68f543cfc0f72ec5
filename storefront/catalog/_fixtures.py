"""
Sample catalog — the storefront's built-in product fixture.
"""

from __future__ import annotations

from typing import Any

from storefront.catalog._catalog import ProductCatalog

SAMPLE_PRODUCTS: tuple[dict[str, Any], ...] = (
    {
        "id": "1",
        "name": "Premium Laptop",
        "price": "1299.99",
        "image": "https://images.unsplash.com/photo-1496181133206-80ce9b88a853?w=400",
        "description": "High-performance laptop for work and gaming",
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Wireless Headphones",
        "price": "199.99",
        "image": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=400",
        "description": "Premium wireless headphones with noise cancellation",
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Smart Watch",
        "price": "349.99",
        "image": "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=400",
        "description": "Advanced fitness tracking and smart features",
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "4",
        "name": "Coffee Maker",
        "price": "89.99",
        "image": "https://images.unsplash.com/photo-1495474472287-4d71bcdd2085?w=400",
        "description": "Professional grade coffee maker for home",
        "category": "home",
        "inStock": True,
    },
    {
        "id": "5",
        "name": "Reading Chair",
        "price": "459.99",
        "image": "https://images.unsplash.com/photo-1506439773649-6e0eb8cfb237?w=400",
        "description": "Comfortable ergonomic reading chair",
        "category": "furniture",
        "inStock": True,
    },
    {
        "id": "6",
        "name": "Desk Lamp",
        "price": "79.99",
        "image": "https://images.unsplash.com/photo-1507473885765-e6ed057f782c?w=400",
        "description": "Modern LED desk lamp with adjustable brightness",
        "category": "home",
        "inStock": False,
    },
)


def sample_catalog() -> ProductCatalog:
    """Catalog built from SAMPLE_PRODUCTS."""
    return ProductCatalog.from_records(SAMPLE_PRODUCTS)


__all__ = ("SAMPLE_PRODUCTS", "sample_catalog")

"""
Catalog types — products and the raw record schema they are loaded from.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront._types import ProductId

ALL_CATEGORIES = "all"
"""Synthetic category that matches every product."""

# ═══════════════════════════════════════════════════════════════════════════════
# Product — Immutable Catalog Entry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Product:
    """
    A sellable product.

    image is an opaque reference for the presentation layer; price is an
    exact Decimal so cart arithmetic never sees binary floats.
    """

    id: ProductId
    name: str
    price: Decimal
    image: str
    description: str
    category: str
    in_stock: bool

    def __post_init__(self) -> None:
        if not isinstance(self.price, Decimal) or not self.price.is_finite():
            raise CatalogError(f"Product {self.id}: price must be a finite Decimal, got {self.price!r}")
        if self.price < 0:
            raise CatalogError(f"Product {self.id}: price must not be negative, got {self.price}")


# ═══════════════════════════════════════════════════════════════════════════════
# ProductRecord — External Data Source Schema
# ═══════════════════════════════════════════════════════════════════════════════


class ProductRecord(BaseModel):
    """
    Raw product as delivered by the data source (fixture, backend).

    Accepts both `in_stock` and the camelCase `inStock`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0, decimal_places=2)
    image: str = ""
    description: str = ""
    category: str = Field(min_length=1)
    in_stock: bool = Field(default=True, alias="inStock")

    @field_validator("price", mode="before")
    @classmethod
    def _price_from_text(cls, value: object) -> object:
        # JSON numbers arrive as floats; go through str to keep 1299.99 exact
        if isinstance(value, float):
            return str(value)
        return value

    def to_product(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            price=self.price,
            image=self.image,
            description=self.description,
            category=self.category,
            in_stock=self.in_stock,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════════


class CatalogError(Exception):
    """Catalog data could not be loaded."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


__all__ = (
    "ALL_CATEGORIES",
    "Product",
    "ProductRecord",
    "CatalogError",
)

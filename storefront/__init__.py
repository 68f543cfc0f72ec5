"""
storefront — cart, pricing and checkout core of a single-shopper store.

    from storefront import catalog as K   # Product list
    from storefront import cart as B      # Cart line items
    from storefront import pricing as P   # Subtotal, tax, shipping, total
    from storefront import checkout as X  # Checkout lifecycle + payment
"""

from storefront import catalog
from storefront import cart
from storefront import pricing
from storefront import checkout
from storefront.config import StorefrontSettings, get_settings
from storefront._log import configure_logging, get_logger
from storefront._types import (
    Result,
    Ok,
    Error,
    Option,
    Some,
    Nothing,
    ProductId,
)

__version__ = "0.1.0"

__all__ = (
    "catalog",
    "cart",
    "pricing",
    "checkout",
    "StorefrontSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "Result",
    "Ok",
    "Error",
    "Option",
    "Some",
    "Nothing",
    "ProductId",
)

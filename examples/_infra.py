"""Shared helpers for examples."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine

from kungfu import Some

from storefront import configure_logging, get_settings
from storefront import catalog as K
from storefront import checkout as X
from storefront import pricing as P
from storefront.cart import CartLineItem

DEMO_FORM: dict[str, str] = {
    "email": "ada@example.com",
    "first_name": "Ada",
    "last_name": "Lovelace",
    "address": "12 Analytical Row",
    "city": "London",
    "zip_code": "N1 9GU",
    "card_number": "4242 4242 4242 4242",
    "expiry_date": "12/29",
    "cvv": "123",
}


def pick(products: K.ProductCatalog, product_id: str) -> K.Product:
    match products.get(product_id):
        case Some(product):
            return product
        case _:
            raise LookupError(f"No product {product_id} in catalog")


def fill_form(process: X.CheckoutProcess, values: dict[str, str] = DEMO_FORM) -> None:
    for name, value in values.items():
        process.update_field(name, value)


def print_lines(items: tuple[CartLineItem, ...]) -> None:
    for item in items:
        print(f"  • {item.quantity}x {item.product.name:22} {P.format_money(item.line_total):>12}")


def print_breakdown(b: P.PricingBreakdown) -> None:
    print(f"  Subtotal: {P.format_money(b.subtotal):>12}")
    print(f"  Tax:      {P.format_money(b.tax):>12}")
    print(f"  Shipping: {P.shipping_label(b.shipping):>12}")
    print(f"  Total:    {P.format_money(b.total):>12}")


def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    configure_logging(get_settings())
    asyncio.run(main())

import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from kungfu import Ok, Error, Some

from storefront import catalog as K
from storefront import cart as B
from storefront import checkout as X


def pick(products: K.ProductCatalog, product_id: str) -> K.Product:
    match products.get(product_id):
        case Some(product):
            return product
        case _:
            raise LookupError(product_id)


class ControlledGateway:
    """Holds every charge until the test sets `release`."""

    def __init__(self, *, decline_reason: str | None = None, ignore_cancel: bool = False) -> None:
        self.decline_reason = decline_reason
        self.ignore_cancel = ignore_cancel
        self.calls = 0
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.voided: list[X.PaymentReceipt] = []

    async def charge(self, amount: Decimal, details: X.PaymentDetails):
        self.calls += 1
        self.started.set()
        try:
            await self.release.wait()
        except asyncio.CancelledError:
            if not self.ignore_cancel:
                raise
            await self.release.wait()

        if self.decline_reason is not None:
            return Error(X.PaymentFailure.declined(self.decline_reason))
        return Ok(X.PaymentReceipt(f"ch_{self.calls}", amount, details.last_four))

    async def void(self, receipt: X.PaymentReceipt) -> None:
        self.voided.append(receipt)


@pytest.fixture
def catalog():
    return K.sample_catalog()


@pytest.fixture
def laptop(catalog):
    return pick(catalog, "1")


@pytest.fixture
def headphones(catalog):
    return pick(catalog, "2")


@pytest.fixture
def coffee_maker(catalog):
    return pick(catalog, "4")


@pytest.fixture
def desk_lamp(catalog):
    return pick(catalog, "6")


@pytest.fixture
def cart():
    return B.CartStore()


@pytest.fixture
def two_item_cart(cart, laptop, headphones):
    cart.add_item(laptop)
    cart.add_item(headphones)
    cart.add_item(headphones)
    return cart


@pytest.fixture
def form_values():
    return {
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


@pytest.fixture
def approving_gateway():
    gateway = MagicMock(spec=X.PaymentGateway)
    gateway.charge = AsyncMock(
        side_effect=lambda amount, details: Ok(
            X.PaymentReceipt("ch_test", amount, details.last_four)
        )
    )
    return gateway


@pytest.fixture
def declining_gateway():
    gateway = MagicMock(spec=X.PaymentGateway)
    gateway.charge = AsyncMock(return_value=Error(X.PaymentFailure.declined("Card declined")))
    return gateway


@pytest.fixture
def controlled_gateway():
    return ControlledGateway()


def fill(process: X.CheckoutProcess, values: dict[str, str]) -> None:
    for name, value in values.items():
        assert isinstance(process.update_field(name, value), Ok)


@pytest.fixture
def open_checkout(two_item_cart, form_values):
    """Build a process on the two-item cart, opened and with a valid form."""

    def _open(gateway, **kwargs) -> X.CheckoutProcess:
        process = X.CheckoutProcess(gateway, **kwargs)
        assert isinstance(process.open(two_item_cart), Ok)
        fill(process, form_values)
        return process

    return _open


@pytest.fixture
def fill_form():
    return fill


@pytest.fixture
def make_gateway():
    return ControlledGateway

"""
Checkout races — double submit, cancel mid-payment, declines and retry.

Run: python -m examples.checkout_race_example
"""

import asyncio

from kungfu import Ok, Error

from storefront import catalog as K
from storefront import cart as B
from storefront import checkout as X
from examples._infra import banner, fill_form, pick, run


def filled_cart() -> B.CartStore:
    products = K.sample_catalog()
    cart = B.CartStore()
    cart.add_item(pick(products, "3"))
    cart.add_item(pick(products, "4"))
    return cart


async def double_submit() -> None:
    print("\n1. Double submit:")
    gateway = X.SimulatedGateway(delay=0.3)
    cart = filled_cart()
    process = X.CheckoutProcess(gateway)
    process.open(cart)
    fill_form(process)

    first = asyncio.create_task(process.submit())
    await asyncio.sleep(0)
    second = await process.submit()

    match second:
        case Error(e):
            print(f"   Second submit refused: {e.kind.value}")
        case Ok(_):
            pass
    await first
    print(f"   Gateway calls: {gateway.call_count} (only 1!)")


async def cancel_mid_payment() -> None:
    print("\n2. Cancel while paying:")
    gateway = X.SimulatedGateway(delay=0.3)
    cart = filled_cart()
    process = X.CheckoutProcess(gateway)
    process.open(cart)
    fill_form(process)

    pending = asyncio.create_task(process.submit())
    await asyncio.sleep(0.1)
    process.cancel()

    match await pending:
        case Error(e):
            print(f"   Submit ended with: {e.kind.value}")
        case Ok(_):
            pass
    print(f"   Status: {process.status.value}, cart still has {cart.item_count()} items")


async def decline_then_retry() -> None:
    print("\n3. Decline, then retry:")
    gateway = X.SimulatedGateway(delay=0, decline_reason="Insufficient funds")
    cart = filled_cart()
    process = X.CheckoutProcess(gateway)
    process.open(cart)
    fill_form(process)

    await process.submit()
    print(f"   Status: {process.status.value} — {process.failure_reason}")

    gateway.decline_reason = None
    process.retry()
    match await process.submit():
        case Ok(confirmation):
            print(f"   ✓ Order {confirmation.order_id}, cart items: {cart.item_count()}")
        case Error(e):
            print(f"   ✗ {e.message}")


async def main() -> None:
    banner("Checkout Races")
    await double_submit()
    await cancel_mid_payment()
    await decline_then_retry()


if __name__ == "__main__":
    run(main)

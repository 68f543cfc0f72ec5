"""
Shopper session — browse, fill the cart, check out.

Run: python -m examples.session_example
"""

from kungfu import Ok, Error

from storefront import catalog as K
from storefront import cart as B
from storefront import checkout as X
from storefront import pricing as P
from examples._infra import DEMO_FORM, banner, fill_form, pick, print_breakdown, print_lines, run


async def main() -> None:
    banner("Shopper Session")

    products = K.sample_catalog()
    cart = B.CartStore()
    cart.subscribe(lambda e: print(f"  [cart] {e.kind.name} {e.product_id or ''} → {e.item_count} items"))

    print("\nCategories:", ", ".join(products.categories()))
    for product in products.list_by_category("electronics"):
        stock = "" if product.in_stock else " (out of stock)"
        print(f"  [{product.id}] {product.name:22} {P.format_money(product.price):>10}{stock}")

    # 1. Fill the cart
    print("\n1. Adding to cart:")
    laptop = pick(products, "1")
    headphones = pick(products, "2")
    desk_lamp = pick(products, "6")

    cart.add_item(laptop)
    cart.add_item(headphones)
    cart.increment(headphones.id)

    match cart.add_item(desk_lamp):
        case Error(rejection):
            print(f"  ✗ {rejection.message}")
        case Ok(_):
            pass

    print_lines(cart.line_items())
    print_breakdown(P.breakdown(cart.line_items()))

    # 2. Checkout with an incomplete form
    print("\n2. Submitting an incomplete form:")
    process = X.CheckoutProcess(X.SimulatedGateway(delay=0.2))
    process.open(cart)
    process.update_field("email", "not-an-email")

    match await process.submit():
        case Error(e):
            for field_error in e.field_errors:
                print(f"  ✗ {field_error.field}: {field_error.message}")
        case Ok(_):
            pass
    print(f"  Status: {process.status.value}")

    # 3. Complete the form and pay
    print("\n3. Paying:")
    fill_form(process, DEMO_FORM)

    match await process.submit():
        case Ok(confirmation):
            print(f"  ✓ Order {confirmation.order_id} for {confirmation.email}")
            print(f"    Charged {P.format_money(confirmation.receipt.amount)}"
                  f" to ****{confirmation.receipt.last_four}")
        case Error(e):
            print(f"  ✗ {e.message}")

    print(f"  Status: {process.status.value}, items left in cart: {cart.item_count()}")
    process.close()


if __name__ == "__main__":
    run(main)

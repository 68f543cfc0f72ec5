import random
import threading
from decimal import Decimal

import pytest
from kungfu import Ok, Error, Some, Nothing

from storefront import cart as B


def quantities(cart: B.CartStore) -> dict[str, int]:
    return {item.product_id: item.quantity for item in cart.line_items()}


# ═══════════════════════════════════════════════════════════════════════════════
# add_item
# ═══════════════════════════════════════════════════════════════════════════════


def test_add_item_creates_line_with_quantity_one(cart, laptop):
    result = cart.add_item(laptop)

    assert isinstance(result, Ok)
    assert result.value == B.CartLineItem(laptop, 1)
    assert cart.item_count() == 1


def test_adding_same_product_twice_merges_into_one_line(cart, laptop):
    cart.add_item(laptop)
    cart.add_item(laptop)

    assert len(cart) == 1
    assert quantities(cart) == {"1": 2}


def test_out_of_stock_product_never_enters_cart(cart, laptop, desk_lamp):
    cart.add_item(laptop)
    before = cart.line_items()

    result = cart.add_item(desk_lamp)

    assert isinstance(result, Error)
    assert result.value.kind is B.RejectionKind.OUT_OF_STOCK
    assert result.value.product_id == "6"
    assert cart.line_items() == before


def test_insertion_order_is_preserved(cart, laptop, headphones, coffee_maker):
    cart.add_item(headphones)
    cart.add_item(laptop)
    cart.add_item(coffee_maker)
    cart.add_item(headphones)

    assert [item.product_id for item in cart.line_items()] == ["2", "1", "4"]


# ═══════════════════════════════════════════════════════════════════════════════
# remove_item / set_quantity
# ═══════════════════════════════════════════════════════════════════════════════


def test_remove_item_returns_removed_line(cart, laptop):
    cart.add_item(laptop)

    match cart.remove_item("1"):
        case Some(item):
            assert item.product_id == "1"
        case _:
            pytest.fail("expected removed line")
    assert cart.is_empty


def test_remove_missing_item_is_noop(cart, laptop):
    cart.add_item(laptop)

    assert isinstance(cart.remove_item("404"), Nothing)
    assert quantities(cart) == {"1": 1}


def test_set_quantity_updates_existing_line(cart, laptop):
    cart.add_item(laptop)

    result = cart.set_quantity("1", 5)

    assert isinstance(result, Ok)
    assert quantities(cart) == {"1": 5}
    assert cart.item_count() == 5


@pytest.mark.parametrize("quantity", [0, -1, -100])
def test_non_positive_quantity_removes_line(cart, laptop, quantity):
    cart.add_item(laptop)

    result = cart.set_quantity("1", quantity)

    assert isinstance(result, Ok)
    assert isinstance(result.value, Nothing)
    assert cart.is_empty


@pytest.mark.parametrize("quantity", [1.5, 2.0, True, "3"])
def test_non_int_quantity_is_refused(cart, laptop, quantity):
    cart.add_item(laptop)

    with pytest.raises(TypeError):
        cart.set_quantity("1", quantity)

    assert quantities(cart) == {"1": 1}
    assert cart.item_count() == 1


def test_set_quantity_never_adds_a_product(cart):
    result = cart.set_quantity("1", 3)

    assert isinstance(result, Error)
    assert result.value.kind is B.RejectionKind.NOT_IN_CART
    assert cart.is_empty


def test_increment_and_decrement(cart, headphones):
    cart.add_item(headphones)

    cart.increment("2")
    cart.increment("2")
    assert quantities(cart) == {"2": 3}

    cart.decrement("2")
    assert quantities(cart) == {"2": 2}


def test_decrement_from_one_removes_line(cart, headphones):
    cart.add_item(headphones)

    cart.decrement("2")

    assert cart.is_empty


def test_increment_missing_line_is_rejected(cart):
    result = cart.increment("2")

    assert isinstance(result, Error)
    assert result.value.kind is B.RejectionKind.NOT_IN_CART


# ═══════════════════════════════════════════════════════════════════════════════
# Queries
# ═══════════════════════════════════════════════════════════════════════════════


def test_empty_cart_counts_zero(cart):
    assert cart.item_count() == 0
    assert cart.line_items() == ()
    assert cart.is_empty


def test_line_items_snapshot_is_not_affected_by_later_mutations(cart, laptop, headphones):
    cart.add_item(laptop)
    snapshot = cart.line_items()

    cart.add_item(laptop)
    cart.add_item(headphones)
    cart.clear()

    assert snapshot == (B.CartLineItem(laptop, 1),)


def test_line_total_is_exact(cart, headphones):
    cart.add_item(headphones)
    cart.set_quantity("2", 3)

    assert cart.line_items()[0].line_total == Decimal("599.97")


def test_clear_removes_everything(two_item_cart):
    two_item_cart.clear()

    assert two_item_cart.item_count() == 0
    assert two_item_cart.is_empty


def test_random_operation_sequences_keep_invariants(catalog):
    rng = random.Random(20240501)
    products = [p for p in catalog.list() if p.in_stock]
    ids = [p.id for p in catalog.list()] + ["ghost"]
    cart = B.CartStore()

    for _ in range(500):
        match rng.choice(["add", "remove", "set", "inc", "dec"]):
            case "add":
                cart.add_item(rng.choice(products))
            case "remove":
                cart.remove_item(rng.choice(ids))
            case "set":
                cart.set_quantity(rng.choice(ids), rng.randint(-2, 5))
            case "inc":
                cart.increment(rng.choice(ids))
            case "dec":
                cart.decrement(rng.choice(ids))

        items = cart.line_items()
        assert cart.item_count() == sum(item.quantity for item in items)
        assert all(item.quantity >= 1 for item in items)
        assert len({item.product_id for item in items}) == len(items)


# ═══════════════════════════════════════════════════════════════════════════════
# Events
# ═══════════════════════════════════════════════════════════════════════════════


def test_listeners_see_applied_mutations(cart, laptop, desk_lamp):
    events: list[B.CartEvent] = []
    cart.subscribe(events.append)

    cart.add_item(laptop)
    cart.add_item(laptop)
    cart.add_item(desk_lamp)
    cart.set_quantity("404", 2)
    cart.remove_item("1")
    cart.clear()

    assert [(e.kind, e.product_id, e.quantity, e.item_count) for e in events] == [
        (B.CartEventKind.ADDED, "1", 1, 1),
        (B.CartEventKind.UPDATED, "1", 2, 2),
        (B.CartEventKind.REMOVED, "1", 0, 0),
    ]


def test_clear_event_only_when_something_was_cleared(cart, laptop):
    events: list[B.CartEvent] = []
    cart.subscribe(events.append)

    cart.clear()
    cart.add_item(laptop)
    cart.clear()

    assert [e.kind for e in events] == [B.CartEventKind.ADDED, B.CartEventKind.CLEARED]


def test_failing_listener_does_not_abort_mutation(cart, laptop):
    def explode(event: B.CartEvent) -> None:
        raise RuntimeError("render failed")

    events: list[B.CartEvent] = []
    cart.subscribe(explode)
    cart.subscribe(events.append)

    result = cart.add_item(laptop)
    cart.clear()

    assert isinstance(result, Ok)
    assert cart.is_empty
    assert [e.kind for e in events] == [B.CartEventKind.ADDED, B.CartEventKind.CLEARED]


def test_unsubscribe_stops_notifications(cart, laptop):
    events: list[B.CartEvent] = []
    unsubscribe = cart.subscribe(events.append)

    cart.add_item(laptop)
    unsubscribe()
    cart.add_item(laptop)

    assert len(events) == 1


# ═══════════════════════════════════════════════════════════════════════════════
# Invariants & serialization
# ═══════════════════════════════════════════════════════════════════════════════


def test_corrupted_state_raises_invariant_error(cart, laptop, headphones):
    cart.add_item(laptop)
    cart._items["1"] = B.CartLineItem(laptop, 0)

    with pytest.raises(B.CartInvariantError):
        cart.add_item(headphones)


def test_mismatched_key_raises_invariant_error(cart, laptop, headphones):
    cart.add_item(laptop)
    cart._items["1"] = B.CartLineItem(headphones, 1)

    with pytest.raises(B.CartInvariantError):
        cart.set_quantity("1", 4)


def test_concurrent_adds_are_serialized(cart, laptop, headphones):
    def worker() -> None:
        for _ in range(200):
            cart.add_item(laptop)
            cart.add_item(headphones)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert quantities(cart) == {"1": 1600, "2": 1600}
    assert cart.item_count() == 3200

# tests/test_carts.py
import asyncio

import pytest

from shopapi.errors import NotFound, ValidationError


def run(coro):
    return asyncio.run(coro)


def test_create_cart(cart_store):
    cart = run(cart_store.create())
    assert cart == {"id": 1, "products": []}
    assert run(cart_store.create())["id"] == 2
    assert len(run(cart_store.list())) == 2


def test_get_by_id(cart_store):
    cart = run(cart_store.create())
    assert run(cart_store.get_by_id(cart["id"])) == cart
    with pytest.raises(NotFound):
        run(cart_store.get_by_id(99))


def test_add_product_twice_increments(cart_store):
    cart = run(cart_store.create())
    run(cart_store.add_product(cart["id"], 7))
    updated = run(cart_store.add_product(cart["id"], 7))
    assert updated["products"] == [{"product": 7, "quantity": 2}]


def test_add_keeps_line_order(cart_store):
    cart = run(cart_store.create())
    run(cart_store.add_product(cart["id"], 3))
    run(cart_store.add_product(cart["id"], 1))
    updated = run(cart_store.add_product(cart["id"], 3))
    assert [line["product"] for line in updated["products"]] == [3, 1]


def test_add_does_not_check_catalogue(cart_store):
    cart = run(cart_store.create())
    updated = run(cart_store.add_product(cart["id"], 12345))
    assert updated["products"] == [{"product": 12345, "quantity": 1}]


def test_add_to_missing_cart(cart_store):
    with pytest.raises(NotFound):
        run(cart_store.add_product(1, 1))


def test_remove_product(cart_store):
    cart = run(cart_store.create())
    run(cart_store.add_product(cart["id"], 7))
    run(cart_store.add_product(cart["id"], 8))

    updated = run(cart_store.remove_product(cart["id"], 7))
    assert updated["products"] == [{"product": 8, "quantity": 1}]

    with pytest.raises(NotFound):
        run(cart_store.remove_product(cart["id"], 7))
    with pytest.raises(NotFound):
        run(cart_store.remove_product(99, 8))


def test_update_quantity_overwrites(cart_store):
    cart = run(cart_store.create())
    run(cart_store.add_product(cart["id"], 7))
    run(cart_store.add_product(cart["id"], 7))

    updated = run(cart_store.update_quantity(cart["id"], 7, 5))
    assert updated["products"] == [{"product": 7, "quantity": 5}]


@pytest.mark.parametrize("quantity", [0, -3])
def test_update_quantity_must_be_positive(cart_store, quantity):
    cart = run(cart_store.create())
    run(cart_store.add_product(cart["id"], 7))
    with pytest.raises(ValidationError):
        run(cart_store.update_quantity(cart["id"], 7, quantity))
    assert run(cart_store.get_by_id(cart["id"]))["products"][0]["quantity"] == 1


def test_update_quantity_missing_line(cart_store):
    cart = run(cart_store.create())
    with pytest.raises(NotFound):
        run(cart_store.update_quantity(cart["id"], 7, 2))
    with pytest.raises(NotFound):
        run(cart_store.update_quantity(50, 7, 2))


def test_clear(cart_store):
    cart = run(cart_store.create())
    run(cart_store.add_product(cart["id"], 1))
    run(cart_store.add_product(cart["id"], 2))

    cleared = run(cart_store.clear(cart["id"]))
    assert cleared == {"id": cart["id"], "products": []}
    with pytest.raises(NotFound):
        run(cart_store.clear(99))

"""Tests for the Python client"""
from unittest.mock import Mock

import pytest

from sdk.shopclient import StoreAPIError, StoreClient


def _response(status_code, body):
    r = Mock()
    r.status_code = status_code
    r.json.return_value = body
    return r


def test_returns_payload():
    session = Mock()
    session.post.return_value = _response(201, {"status": "success", "payload": {"id": 1, "products": []}})
    c = StoreClient(base_url="http://shop/", session=session)

    assert c.create_cart() == {"id": 1, "products": []}
    session.post.assert_called_once_with("http://shop/api/carts", timeout=10)


def test_update_quantity_sends_body():
    session = Mock()
    session.put.return_value = _response(200, {"status": "success", "payload": {"id": 2, "products": []}})
    c = StoreClient(base_url="http://shop", session=session)

    c.update_quantity(2, 7, 5)
    session.put.assert_called_once_with("http://shop/api/carts/2/product/7", json={"quantity": 5}, timeout=10)


def test_error_envelope_raises():
    session = Mock()
    session.get.return_value = _response(404, {"status": "error", "message": "Cart with id 3 not found", "error": "not_found"})
    c = StoreClient(session=session)

    with pytest.raises(StoreAPIError) as exc:
        c.get_cart(3)
    assert exc.value.status_code == 404
    assert exc.value.error == "not_found"
    assert "not found" in exc.value.message


@pytest.mark.filterwarnings("ignore::DeprecationWarning")
def test_against_app(client, sample_product):
    # TestClient speaks the same get/post/put/delete API as a requests session
    c = StoreClient(base_url="http://testserver", session=client)
    product = c.create_product(**sample_product)
    cart = c.create_cart()
    c.add_to_cart(cart["id"], product["id"])
    assert c.get_cart(cart["id"])["products"] == [{"product": product["id"], "quantity": 1}]
    assert c.update_product(product["id"], stock=1)["stock"] == 1

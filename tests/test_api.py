"""Tests for the HTTP routes"""
import json

from fastapi.testclient import TestClient


def test_welcome(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "products" in r.json()["endpoints"]


def test_data_files_created(client, settings):
    assert settings.products_path.exists()
    assert settings.carts_path.exists()


def test_product_crud(client, sample_product):
    r = client.post("/api/products", json=sample_product)
    assert r.status_code == 201
    body = r.json()
    assert body["status"] == "success"
    assert body["message"]
    pid = body["payload"]["id"]

    r = client.get("/api/products")
    assert r.status_code == 200
    assert [p["id"] for p in r.json()["payload"]] == [pid]

    r = client.get(f"/api/products/{pid}")
    assert r.status_code == 200
    assert r.json()["payload"]["code"] == "KB-001"

    r = client.put(f"/api/products/{pid}", json={"stock": 0})
    assert r.status_code == 200
    assert r.json()["payload"]["stock"] == 0

    r = client.delete(f"/api/products/{pid}")
    assert r.status_code == 200
    assert r.json()["payload"]["id"] == pid

    r = client.get(f"/api/products/{pid}")
    assert r.status_code == 404
    assert r.json()["status"] == "error"


def test_create_product_rejects_empty_body_and_id(client, sample_product):
    r = client.post("/api/products", json={})
    assert r.status_code == 400
    assert r.json()["status"] == "error"

    r = client.post("/api/products")
    assert r.status_code == 400

    r = client.post("/api/products", json={**sample_product, "id": 5})
    assert r.status_code == 400


def test_create_product_validation_and_conflict(client, sample_product):
    r = client.post("/api/products", json={**sample_product, "price": 0})
    assert r.status_code == 400
    assert r.json()["error"] == "validation_error"
    assert "price" in r.json()["message"]

    client.post("/api/products", json=sample_product)
    r = client.post("/api/products", json=sample_product)
    assert r.status_code == 400
    assert r.json()["error"] == "conflict"


def test_update_product_errors(client, sample_product):
    pid = client.post("/api/products", json=sample_product).json()["payload"]["id"]

    assert client.put(f"/api/products/{pid}", json={}).status_code == 400
    assert client.put(f"/api/products/{pid}", json={"id": 9}).status_code == 400
    assert client.put("/api/products/999", json={"title": "x"}).status_code == 404
    assert client.put(f"/api/products/{pid}", json={"price": -1}).status_code == 400


def test_delete_missing_product(client):
    r = client.delete("/api/products/1")
    assert r.status_code == 404
    assert r.json()["error"] == "not_found"


def test_non_integer_id_is_bad_request(client):
    assert client.post("/api/carts/abc/product/1").status_code == 400
    assert client.post("/api/carts/1/product/xyz").status_code == 400


def test_cart_scenario(client):
    r = client.post("/api/carts")
    assert r.status_code == 201
    assert r.json()["payload"] == {"id": 1, "products": []}

    r = client.post("/api/carts/1/product/7")
    assert r.status_code == 200
    assert r.json()["payload"] == {"id": 1, "products": [{"product": 7, "quantity": 1}]}

    r = client.post("/api/carts/1/product/7")
    assert r.json()["payload"]["products"] == [{"product": 7, "quantity": 2}]

    r = client.put("/api/carts/1/product/7", json={"quantity": 10})
    assert r.status_code == 200
    assert r.json()["payload"]["products"] == [{"product": 7, "quantity": 10}]

    r = client.delete("/api/carts/1/product/7")
    assert r.status_code == 200
    assert r.json()["payload"] == {"id": 1, "products": []}


def test_cart_list_get_and_clear(client):
    client.post("/api/carts")
    client.post("/api/carts/1/product/3")

    r = client.get("/api/carts")
    assert r.status_code == 200
    assert len(r.json()["payload"]) == 1

    assert client.get("/api/carts/1").status_code == 200
    assert client.get("/api/carts/2").status_code == 404

    r = client.delete("/api/carts/1")
    assert r.status_code == 200
    assert r.json()["payload"] == {"id": 1, "products": []}
    assert client.delete("/api/carts/2").status_code == 404


def test_cart_not_found_routes(client):
    assert client.post("/api/carts/5/product/1").status_code == 404
    assert client.delete("/api/carts/5/product/1").status_code == 404
    assert client.put("/api/carts/5/product/1", json={"quantity": 2}).status_code == 404

    client.post("/api/carts")
    assert client.delete("/api/carts/1/product/1").status_code == 404


def test_update_quantity_bad_bodies(client):
    client.post("/api/carts")
    client.post("/api/carts/1/product/7")

    assert client.put("/api/carts/1/product/7", json={}).status_code == 400
    assert client.put("/api/carts/1/product/7", json={"quantity": "many"}).status_code == 400
    assert client.put("/api/carts/1/product/7", json={"quantity": 0}).status_code == 400
    assert client.put("/api/carts/1/product/7", json={"quantity": -2}).status_code == 400
    assert client.get("/api/carts/1").json()["payload"]["products"][0]["quantity"] == 1


def test_unknown_route(client):
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
    body = r.json()
    assert body["status"] == "error"
    assert body["path"] == "/api/nothing-here"


def test_corrupt_file_is_server_error(client, settings):
    settings.products_path.write_text("oops", encoding="utf-8")
    r = client.get("/api/products")
    assert r.status_code == 500
    assert r.json()["error"] == "io_failure"


def test_unexpected_error_is_generic_500(app):
    async def boom():
        raise RuntimeError("secret detail")

    app.state.cart_store.list = boom
    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/api/carts")
    assert r.status_code == 500
    assert r.json()["status"] == "error"
    assert "secret detail" not in r.text


def test_nan_price_is_bad_request(client, sample_product):
    body = json.dumps(sample_product).replace("89.9", "NaN")
    r = client.post("/api/products", content=body, headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "validation_error"
    assert "price" in r.json()["message"]

    r = client.get("/api/products")
    assert r.status_code == 200
    assert r.json()["payload"] == []


def test_unsupported_method_is_not_found(client):
    r = client.patch("/api/products/1", json={"title": "x"})
    assert r.status_code == 404
    assert r.json()["status"] == "error"
    assert r.json()["path"] == "/api/products/1"

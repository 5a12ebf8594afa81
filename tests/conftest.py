"""Pytest configuration and fixtures"""
import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# Importing shopapi.main builds the default app; keep its data files out of the repo.
os.environ.setdefault("SHOP_DATA_DIR", tempfile.mkdtemp(prefix="shopapi-test-"))

from shopapi.carts import CartStore
from shopapi.config import Settings
from shopapi.main import create_app
from shopapi.products import ProductStore


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data", io_timeout=2.0)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def product_store(tmp_path):
    return ProductStore(tmp_path / "products.json")


@pytest.fixture
def cart_store(tmp_path):
    return CartStore(tmp_path / "carts.json")


@pytest.fixture
def sample_product():
    """Valid product payload"""
    return {
        "title": "Mechanical keyboard",
        "description": "Tenkeyless, brown switches",
        "code": "KB-001",
        "price": 89.9,
        "stock": 12,
        "category": "peripherals",
    }

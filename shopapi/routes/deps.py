"""
Shared dependencies for routers.

Stores live on app.state and are created once per application.
"""
from typing import Any, Optional

from fastapi import Request

from shopapi.carts import CartStore
from shopapi.models import Envelope
from shopapi.products import ProductStore


def get_product_store(request: Request) -> ProductStore:
    return request.app.state.product_store


def get_cart_store(request: Request) -> CartStore:
    return request.app.state.cart_store


def success(payload: Any, message: Optional[str] = None) -> dict:
    return Envelope(status="success", message=message, payload=payload).model_dump(exclude_none=True)

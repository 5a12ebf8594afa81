"""
Products API router.

/api/products CRUD over the JSON product catalogue.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from shopapi.errors import ERROR_ID_NOT_ALLOWED, ERROR_PRODUCT_DATA_REQUIRED, ERROR_UPDATE_DATA_REQUIRED, ValidationError
from shopapi.products import ProductStore
from shopapi.routes.deps import get_product_store, success

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("")
async def list_products(store: ProductStore = Depends(get_product_store)):
    return success(await store.list())


@router.get("/{pid}")
async def get_product(pid: int, store: ProductStore = Depends(get_product_store)):
    return success(await store.get_by_id(pid))


@router.post("", status_code=201)
async def create_product(
    payload: Optional[Dict[str, Any]] = Body(None),
    store: ProductStore = Depends(get_product_store),
):
    if not payload:
        raise ValidationError(ERROR_PRODUCT_DATA_REQUIRED)
    if "id" in payload:
        raise ValidationError(ERROR_ID_NOT_ALLOWED, field="id")

    product = await store.create(payload)
    return success(product, "Product created successfully")


@router.put("/{pid}")
async def update_product(
    pid: int,
    payload: Optional[Dict[str, Any]] = Body(None),
    store: ProductStore = Depends(get_product_store),
):
    if not payload:
        raise ValidationError(ERROR_UPDATE_DATA_REQUIRED)
    if "id" in payload:
        raise ValidationError("The product id cannot be updated", field="id")

    product = await store.update(pid, payload)
    return success(product, "Product updated successfully")


@router.delete("/{pid}")
async def delete_product(pid: int, store: ProductStore = Depends(get_product_store)):
    product = await store.delete(pid)
    return success(product, "Product deleted successfully")

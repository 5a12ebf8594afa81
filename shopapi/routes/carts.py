"""
Carts API router.

/api/carts and the line-item routes under /api/carts/{cid}/product/{pid}.
"""
from fastapi import APIRouter, Depends

from shopapi.carts import CartStore
from shopapi.errors import ERROR_INVALID_QUANTITY, ValidationError
from shopapi.models import QuantityIn
from shopapi.routes.deps import get_cart_store, success

router = APIRouter(prefix="/api/carts", tags=["carts"])


@router.get("")
async def list_carts(store: CartStore = Depends(get_cart_store)):
    return success(await store.list())


@router.post("", status_code=201)
async def create_cart(store: CartStore = Depends(get_cart_store)):
    cart = await store.create()
    return success(cart, "Cart created successfully")


@router.get("/{cid}")
async def get_cart(cid: int, store: CartStore = Depends(get_cart_store)):
    return success(await store.get_by_id(cid))


@router.post("/{cid}/product/{pid}")
async def add_product(cid: int, pid: int, store: CartStore = Depends(get_cart_store)):
    cart = await store.add_product(cid, pid)
    return success(cart, "Product added to cart")


@router.delete("/{cid}/product/{pid}")
async def remove_product(cid: int, pid: int, store: CartStore = Depends(get_cart_store)):
    cart = await store.remove_product(cid, pid)
    return success(cart, "Product removed from cart")


@router.put("/{cid}/product/{pid}")
async def update_quantity(cid: int, pid: int, payload: QuantityIn, store: CartStore = Depends(get_cart_store)):
    if payload.quantity <= 0:
        raise ValidationError(ERROR_INVALID_QUANTITY, field="quantity")

    cart = await store.update_quantity(cid, pid, payload.quantity)
    return success(cart, "Quantity updated")


@router.delete("/{cid}")
async def clear_cart(cid: int, store: CartStore = Depends(get_cart_store)):
    cart = await store.clear(cid)
    return success(cart, "Cart cleared")

from shopapi.routes.carts import router as carts_router
from shopapi.routes.products import router as products_router

__all__ = ["carts_router", "products_router"]

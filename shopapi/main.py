# shopapi/main.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shopapi.carts import CartStore
from shopapi.config import Settings, get_settings
from shopapi.errors import ERROR_INTERNAL, ERROR_ROUTE_NOT_FOUND, StoreError
from shopapi.logging import configure_logging, get_logger
from shopapi.products import ProductStore
from shopapi.routes import carts_router, products_router

logger = get_logger(__name__)

ENDPOINTS = {
    "products": {
        "getAll": "GET /api/products",
        "getById": "GET /api/products/:pid",
        "create": "POST /api/products",
        "update": "PUT /api/products/:pid",
        "delete": "DELETE /api/products/:pid",
    },
    "carts": {
        "getAll": "GET /api/carts",
        "create": "POST /api/carts",
        "getById": "GET /api/carts/:cid",
        "addProduct": "POST /api/carts/:cid/product/:pid",
        "removeProduct": "DELETE /api/carts/:cid/product/:pid",
        "updateQuantity": "PUT /api/carts/:cid/product/:pid",
        "clearCart": "DELETE /api/carts/:cid",
    },
}


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "message": message, **extra})


# ---------------------------
# Error handlers
# ---------------------------
async def store_error_handler(request: Request, exc: StoreError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return _error(exc.status_code, exc.message, error=exc.code)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(part) for part in first.get("loc", ()))
    detail = f"{where}: {first.get('msg', 'invalid value')}" if where else "Invalid request"
    logger.warning("%s %s rejected: %s", request.method, request.url.path, detail)
    return _error(400, "Invalid request", error=detail)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405):
        return _error(404, ERROR_ROUTE_NOT_FOUND, path=request.url.path)
    return _error(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, ERROR_INTERNAL, error="internal_error")


# ---------------------------
# Application factory
# ---------------------------
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Store API ready on http://%s:%s", settings.host, settings.port)
        logger.info("Products file: %s", settings.products_path)
        logger.info("Carts file: %s", settings.carts_path)
        for group in ENDPOINTS.values():
            for route in group.values():
                logger.debug("  %s", route)
        yield
        logger.info("Store API shutting down")

    app = FastAPI(title="shopapi (JSON file store)", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # creates the data files when they do not exist yet
    app.state.settings = settings
    app.state.product_store = ProductStore(settings.products_path, timeout=settings.io_timeout)
    app.state.cart_store = CartStore(settings.carts_path, timeout=settings.io_timeout)

    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/")
    async def welcome():
        return {"message": "Welcome to the e-commerce API", "endpoints": ENDPOINTS}

    app.include_router(products_router)
    app.include_router(carts_router)
    return app


app = create_app()

"""
Store errors.

Every failure raised by a store is a StoreError subclass. The HTTP layer
maps them to responses using `status_code` and `code`.
"""
from typing import Optional


class StoreError(Exception):
    status_code = 500
    code = "store_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    status_code = 400
    code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFound(StoreError):
    status_code = 404
    code = "not_found"


class Conflict(StoreError):
    # duplicate codes are reported to clients as a bad request
    status_code = 400
    code = "conflict"


class IOFailure(StoreError):
    status_code = 500
    code = "io_failure"


# Common messages
ERROR_INTERNAL = "Internal server error"
ERROR_ROUTE_NOT_FOUND = "Route not found"
ERROR_PRODUCT_DATA_REQUIRED = "Product data is required"
ERROR_UPDATE_DATA_REQUIRED = "At least one field is required to update a product"
ERROR_ID_NOT_ALLOWED = "The id is generated automatically and cannot be provided"
ERROR_INVALID_QUANTITY = "A valid quantity is required"

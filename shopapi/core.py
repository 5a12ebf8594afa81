from typing import Any, Dict, List, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from shopapi.errors import ValidationError
from shopapi.models import Product, ProductIn

REQUIRED_PRODUCT_FIELDS = ("title", "description", "code", "price", "stock", "category")

_FIELD_MESSAGES = {
    "title": "title must be a non-empty string",
    "description": "description must be a non-empty string",
    "code": "code must be a non-empty string",
    "category": "category must be a non-empty string",
    "price": "price must be a number greater than 0",
    "stock": "stock must be a number greater than or equal to 0",
    "status": "status must be a boolean",
    "thumbnails": "thumbnails must be a list of strings",
    "id": "id must be a positive integer",
}


def next_id(items: List[Dict[str, Any]]) -> int:
    if not items:
        return 1
    return max(item["id"] for item in items) + 1


def find_index(items: List[Dict[str, Any]], item_id: int) -> int:
    for i, item in enumerate(items):
        if item.get("id") == item_id:
            return i
    return -1


def find_line_item(cart: Dict[str, Any], product_id: int) -> int:
    for i, line in enumerate(cart["products"]):
        if line.get("product") == product_id:
            return i
    return -1


def drop_nulls(data: Dict[str, Any]) -> Dict[str, Any]:
    # a null status or thumbnails means "use the default"
    return {k: v for k, v in data.items() if not (k in ("status", "thumbnails") and v is None)}


def _validate(model: Type[BaseModel], data: Dict[str, Any]) -> BaseModel:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        err = e.errors()[0]
        field = str(err["loc"][0]) if err["loc"] else None
        message = _FIELD_MESSAGES.get(field, f"{field}: {err['msg']}")
        raise ValidationError(message, field=field) from e


def validate_new_product(data: Dict[str, Any]) -> ProductIn:
    for field in REQUIRED_PRODUCT_FIELDS:
        if data.get(field) is None:
            raise ValidationError(f"Field '{field}' is required", field=field)
    return _validate(ProductIn, drop_nulls(data))


def validate_product(record: Dict[str, Any]) -> None:
    """Check a full stored record, typically the result of an update merge."""
    _validate(Product, record)


def make_product_dict(product_id: int, p: ProductIn) -> Dict[str, Any]:
    return {
        "id": product_id,
        "title": p.title,
        "description": p.description,
        "code": p.code,
        "price": p.price,
        "status": p.status,
        "stock": p.stock,
        "category": p.category,
        "thumbnails": list(p.thumbnails),
    }

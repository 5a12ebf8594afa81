# shopapi/models.py
import math

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, field_validator
from typing import Any, List, Optional, Union

Number = Union[StrictInt, StrictFloat]

# ---------------------------
# Products
# ---------------------------
class ProductIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: StrictStr
    description: StrictStr
    code: StrictStr
    price: Number
    stock: Number
    category: StrictStr
    status: StrictBool = True
    thumbnails: List[StrictStr] = Field(default_factory=list)

    @field_validator("title", "description", "code", "category")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must be a non-empty string")
        return v

    @field_validator("price")
    @classmethod
    def positive_price(cls, v):
        if not math.isfinite(v) or v <= 0:
            raise ValueError("must be a finite number greater than 0")
        return v

    @field_validator("stock")
    @classmethod
    def non_negative_stock(cls, v):
        if not math.isfinite(v) or v < 0:
            raise ValueError("must be a finite number greater than or equal to 0")
        return v


class Product(ProductIn):
    # unknown fields sent in an update are kept on the record
    model_config = ConfigDict(extra="allow")

    id: StrictInt = Field(ge=1)


# ---------------------------
# Carts
# ---------------------------
class LineItem(BaseModel):
    product: int
    quantity: int = Field(ge=1)


class Cart(BaseModel):
    id: int
    products: List[LineItem] = Field(default_factory=list)


class QuantityIn(BaseModel):
    quantity: int


# ---------------------------
# Response envelope
# ---------------------------
class Envelope(BaseModel):
    status: str
    message: Optional[str] = None
    payload: Optional[Any] = None
    error: Optional[str] = None

from pathlib import Path
from typing import Any, Dict, List

from shopapi.core import drop_nulls, find_index, make_product_dict, next_id, validate_new_product, validate_product
from shopapi.database import JsonCollection
from shopapi.errors import Conflict, NotFound, ValidationError
from shopapi.logging import get_logger

logger = get_logger(__name__)


class ProductStore:
    """CRUD over the product catalogue kept in one JSON file.

    Every call reloads the file; mutations hold the file lock until the
    whole collection has been written back.
    """

    def __init__(self, path: Path, timeout: float = 5.0):
        self.db = JsonCollection(path, timeout=timeout)

    async def list(self) -> List[Dict[str, Any]]:
        return await self.db.load()

    async def get_by_id(self, product_id: int) -> Dict[str, Any]:
        products = await self.db.load()
        index = find_index(products, product_id)
        if index == -1:
            raise NotFound(f"Product with id {product_id} not found")
        return products[index]

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        fields = validate_new_product(data)

        async with self.db.lock:
            products = await self.db.load()
            if any(p.get("code") == fields.code for p in products):
                raise Conflict(f"A product with code '{fields.code}' already exists")

            product = make_product_dict(next_id(products), fields)
            products.append(product)
            await self.db.save(products)

        logger.info("Created product %s (code=%s)", product["id"], product["code"])
        return product

    async def update(self, product_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        async with self.db.lock:
            products = await self.db.load()
            index = find_index(products, product_id)
            if index == -1:
                raise NotFound(f"Product with id {product_id} not found")

            if "id" in data:
                raise ValidationError("The product id cannot be updated", field="id")

            if "code" in data:
                taken = any(p.get("code") == data["code"] and p.get("id") != product_id for p in products)
                if taken:
                    raise Conflict(f"Another product already has code '{data['code']}'")

            current = products[index]
            updated = {**current, **drop_nulls(data), "id": current["id"]}
            validate_product(updated)

            products[index] = updated
            await self.db.save(products)

        logger.info("Updated product %s (fields: %s)", product_id, ", ".join(sorted(data)))
        return updated

    async def delete(self, product_id: int) -> Dict[str, Any]:
        async with self.db.lock:
            products = await self.db.load()
            index = find_index(products, product_id)
            if index == -1:
                raise NotFound(f"Product with id {product_id} not found")

            deleted = products.pop(index)
            await self.db.save(products)

        logger.info("Deleted product %s", product_id)
        return deleted

from pathlib import Path
from typing import Any, Dict, List

from shopapi.core import find_index, find_line_item, next_id
from shopapi.database import JsonCollection
from shopapi.errors import NotFound, ValidationError
from shopapi.logging import get_logger
from shopapi.models import Cart, LineItem

logger = get_logger(__name__)


class CartStore:
    """Carts and their line items, kept in one JSON file.

    Line items reference products by id only; the catalogue is never
    consulted.
    """

    def __init__(self, path: Path, timeout: float = 5.0):
        self.db = JsonCollection(path, timeout=timeout)

    @staticmethod
    def _cart_index(carts: List[Dict[str, Any]], cart_id: int) -> int:
        index = find_index(carts, cart_id)
        if index == -1:
            raise NotFound(f"Cart with id {cart_id} not found")
        return index

    @staticmethod
    def _line_index(cart: Dict[str, Any], product_id: int) -> int:
        index = find_line_item(cart, product_id)
        if index == -1:
            raise NotFound(f"Product {product_id} not found in cart {cart['id']}")
        return index

    async def list(self) -> List[Dict[str, Any]]:
        return await self.db.load()

    async def get_by_id(self, cart_id: int) -> Dict[str, Any]:
        carts = await self.db.load()
        return carts[self._cart_index(carts, cart_id)]

    async def create(self) -> Dict[str, Any]:
        async with self.db.lock:
            carts = await self.db.load()
            cart = Cart(id=next_id(carts)).model_dump()
            carts.append(cart)
            await self.db.save(carts)

        logger.info("Created cart %s", cart["id"])
        return cart

    async def add_product(self, cart_id: int, product_id: int) -> Dict[str, Any]:
        async with self.db.lock:
            carts = await self.db.load()
            cart = carts[self._cart_index(carts, cart_id)]

            line = find_line_item(cart, product_id)
            if line != -1:
                cart["products"][line]["quantity"] += 1
            else:
                cart["products"].append(LineItem(product=product_id, quantity=1).model_dump())

            await self.db.save(carts)

        logger.info("Added product %s to cart %s", product_id, cart_id)
        return cart

    async def remove_product(self, cart_id: int, product_id: int) -> Dict[str, Any]:
        async with self.db.lock:
            carts = await self.db.load()
            cart = carts[self._cart_index(carts, cart_id)]
            del cart["products"][self._line_index(cart, product_id)]
            await self.db.save(carts)

        logger.info("Removed product %s from cart %s", product_id, cart_id)
        return cart

    async def update_quantity(self, cart_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        async with self.db.lock:
            carts = await self.db.load()
            cart = carts[self._cart_index(carts, cart_id)]
            line = self._line_index(cart, product_id)

            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
                raise ValidationError("Quantity must be an integer greater than 0", field="quantity")

            cart["products"][line]["quantity"] = quantity
            await self.db.save(carts)

        logger.info("Set quantity of product %s in cart %s to %d", product_id, cart_id, quantity)
        return cart

    async def clear(self, cart_id: int) -> Dict[str, Any]:
        async with self.db.lock:
            carts = await self.db.load()
            cart = carts[self._cart_index(carts, cart_id)]
            cart["products"] = []
            await self.db.save(carts)

        logger.info("Cleared cart %s", cart_id)
        return cart

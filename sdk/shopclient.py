# sdk/shopclient.py
import requests
import httpx
from typing import Any, Dict, Optional
from rich import print


class StoreAPIError(Exception):
    """Raised when the API answers with an error envelope."""

    def __init__(self, status_code: int, message: str, error: Optional[str] = None):
        super().__init__(f"HTTP {status_code}: {message}" + (f" ({error})" if error else ""))
        self.status_code = status_code
        self.message = message
        self.error = error


def _unwrap(r) -> Any:
    """Return the payload of a success envelope, raise StoreAPIError otherwise."""
    try:
        body = r.json()
    except ValueError:
        body = {}
    if r.status_code >= 400:
        raise StoreAPIError(
            r.status_code,
            body.get("message") or getattr(r, "reason", None) or "request failed",
            body.get("error"),
        )
    return body.get("payload")


class StoreClient:
    def __init__(self, base_url: str = "http://localhost:8080", timeout: int = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    # Products
    def list_products(self):
        r = self.session.get(self._url("/api/products"), timeout=self.timeout)
        return _unwrap(r)

    def get_product(self, product_id: int):
        r = self.session.get(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        return _unwrap(r)

    def create_product(self, title: str, description: str, code: str, price: float, stock: int,
                       category: str, status: bool = True, thumbnails: Optional[list] = None):
        r = self.session.post(self._url("/api/products"), json={
            "title": title, "description": description, "code": code, "price": price,
            "stock": stock, "category": category, "status": status, "thumbnails": thumbnails or [],
        }, timeout=self.timeout)
        return _unwrap(r)

    def update_product(self, product_id: int, **fields: Any):
        r = self.session.put(self._url(f"/api/products/{product_id}"), json=fields, timeout=self.timeout)
        return _unwrap(r)

    def delete_product(self, product_id: int):
        r = self.session.delete(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        return _unwrap(r)

    # Carts
    def list_carts(self):
        r = self.session.get(self._url("/api/carts"), timeout=self.timeout)
        return _unwrap(r)

    def create_cart(self):
        r = self.session.post(self._url("/api/carts"), timeout=self.timeout)
        return _unwrap(r)

    def get_cart(self, cart_id: int):
        r = self.session.get(self._url(f"/api/carts/{cart_id}"), timeout=self.timeout)
        return _unwrap(r)

    def add_to_cart(self, cart_id: int, product_id: int):
        r = self.session.post(self._url(f"/api/carts/{cart_id}/product/{product_id}"), timeout=self.timeout)
        return _unwrap(r)

    def remove_from_cart(self, cart_id: int, product_id: int):
        r = self.session.delete(self._url(f"/api/carts/{cart_id}/product/{product_id}"), timeout=self.timeout)
        return _unwrap(r)

    def update_quantity(self, cart_id: int, product_id: int, quantity: int):
        r = self.session.put(self._url(f"/api/carts/{cart_id}/product/{product_id}"),
                             json={"quantity": quantity}, timeout=self.timeout)
        return _unwrap(r)

    def clear_cart(self, cart_id: int):
        r = self.session.delete(self._url(f"/api/carts/{cart_id}"), timeout=self.timeout)
        return _unwrap(r)

    # Async add (used by the concurrency demo)
    async def add_to_cart_async(self, cart_id: int, product_id: int, client: Optional[httpx.AsyncClient] = None) -> Dict[str, Any]:
        url = self._url(f"/api/carts/{cart_id}/product/{product_id}")
        if client is not None:
            return _unwrap(await client.post(url))
        async with httpx.AsyncClient(timeout=self.timeout) as ac:
            return _unwrap(await ac.post(url))


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Store API command line")
    parser.add_argument("--base-url", default="http://127.0.0.1:8080", help="API base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    cp = subparsers.add_parser("create-product", help="Create a new product")
    cp.add_argument("--title", required=True)
    cp.add_argument("--description", required=True)
    cp.add_argument("--code", required=True, help="Unique product code")
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--stock", type=int, required=True)
    cp.add_argument("--category", required=True)

    up = subparsers.add_parser("update-product", help="Update product fields")
    up.add_argument("--product-id", type=int, required=True)
    up.add_argument("--title")
    up.add_argument("--description")
    up.add_argument("--price", type=float)
    up.add_argument("--stock", type=int)
    up.add_argument("--category")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", type=int, required=True)

    # ---------------------------
    # Cart commands
    # ---------------------------
    subparsers.add_parser("list-carts", help="List all carts")
    subparsers.add_parser("create-cart", help="Create an empty cart")

    vc = subparsers.add_parser("view-cart", help="View cart contents")
    vc.add_argument("--cart-id", type=int, required=True)

    add = subparsers.add_parser("add-to-cart", help="Add one unit of a product to a cart")
    add.add_argument("--cart-id", type=int, required=True)
    add.add_argument("--product-id", type=int, required=True)

    rm = subparsers.add_parser("remove-from-cart", help="Remove a product from a cart")
    rm.add_argument("--cart-id", type=int, required=True)
    rm.add_argument("--product-id", type=int, required=True)

    sq = subparsers.add_parser("set-quantity", help="Set the quantity of a product in a cart")
    sq.add_argument("--cart-id", type=int, required=True)
    sq.add_argument("--product-id", type=int, required=True)
    sq.add_argument("--qty", type=int, required=True)

    cc = subparsers.add_parser("clear-cart", help="Remove every product from a cart")
    cc.add_argument("--cart-id", type=int, required=True)

    # ---------------------------
    # Parse and execute
    # ---------------------------
    args = parser.parse_args()
    c = StoreClient(base_url=args.base_url)

    try:
        if args.command == "list-products":
            print(c.list_products())
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(args.title, args.description, args.code, args.price, args.stock, args.category))
        elif args.command == "update-product":
            fields = {k: getattr(args, k) for k in ("title", "description", "price", "stock", "category")
                      if getattr(args, k) is not None}
            print(c.update_product(args.product_id, **fields))
        elif args.command == "delete-product":
            print(c.delete_product(args.product_id))
        elif args.command == "list-carts":
            print(c.list_carts())
        elif args.command == "create-cart":
            print(c.create_cart())
        elif args.command == "view-cart":
            print(c.get_cart(args.cart_id))
        elif args.command == "add-to-cart":
            print(c.add_to_cart(args.cart_id, args.product_id))
        elif args.command == "remove-from-cart":
            print(c.remove_from_cart(args.cart_id, args.product_id))
        elif args.command == "set-quantity":
            print(c.update_quantity(args.cart_id, args.product_id, args.qty))
        elif args.command == "clear-cart":
            print(c.clear_cart(args.cart_id))
    except StoreAPIError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)

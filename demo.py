#!/usr/bin/env python
from sdk.shopclient import StoreClient, StoreAPIError

def main():
    c = StoreClient(base_url="http://127.0.0.1:8080")

    # -----------------------------
    # Create a product
    # -----------------------------
    print("\nCreating product...")
    try:
        product = c.create_product("Laptop", "14 inch ultrabook", "LAP-001", 1500, 3, "electronics")
    except StoreAPIError as e:
        # already created by a previous run
        print(e)
        product = next(p for p in c.list_products() if p["code"] == "LAP-001")
    print(product)

    # -----------------------------
    # List products
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    # -----------------------------
    # Cart walk-through
    # -----------------------------
    print("\nCreating cart...")
    cart = c.create_cart()
    print(cart)

    pid = product["id"]
    print(f"\nAdding product {pid} twice...")
    print(c.add_to_cart(cart["id"], pid))
    print(c.add_to_cart(cart["id"], pid))

    print("\nSetting quantity to 10...")
    print(c.update_quantity(cart["id"], pid, 10))

    print("\nRemoving the product...")
    print(c.remove_from_cart(cart["id"], pid))

    # -----------------------------
    # Errors come back as StoreAPIError
    # -----------------------------
    print("\nAsking for a cart that does not exist...")
    try:
        c.get_cart(999999)
    except StoreAPIError as e:
        print(e)

if __name__ == "__main__":
    main()

import asyncio

import httpx

from sdk.shopclient import StoreClient, StoreAPIError

ADDS = 20


async def add_one(client, ac, cart_id, product_id):
    try:
        await client.add_to_cart_async(cart_id, product_id, client=ac)
    except StoreAPIError as e:
        print(f"❌ add failed: {e}")


async def main():
    c = StoreClient(base_url="http://127.0.0.1:8080")

    cart = c.create_cart()
    print(f"\n🛒 Created cart {cart['id']}")

    # Fire concurrent adds of the same product
    print(f"\n⚡ Sending {ADDS} concurrent adds of product 1...")
    async with httpx.AsyncClient(timeout=c.timeout) as ac:
        await asyncio.gather(*(add_one(c, ac, cart["id"], 1) for _ in range(ADDS)))

    final = c.get_cart(cart["id"])
    quantity = final["products"][0]["quantity"] if final["products"] else 0
    print(f"\n📦 Final cart: {final}")
    if quantity == ADDS:
        print(f"✅ quantity is {quantity}, no update was lost")
    else:
        print(f"⚠️  expected {ADDS}, got {quantity}")


if __name__ == "__main__":
    asyncio.run(main())

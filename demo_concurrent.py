import asyncio
import os

from products_sdk.client import ProductsApiError, ProductsClient, random_product_name

BURST = 50
CATEGORIES = ["Tools", "tools", "Kitchen"]


async def create_one(c: ProductsClient, i: int):
    try:
        return await c.create_product_async(
            random_product_name("burst"), "concurrent demo", i, CATEGORIES[i % len(CATEGORIES)], i % 2 == 0
        )
    except ProductsApiError as e:
        print(f"❌ create {i} failed: {e}")
        return None


async def main():
    c = ProductsClient(
        base_url=os.getenv("PRODUCTS_API_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("PRODUCTS_API_KEY", "mysecretapikey"),
    )
    before = sum(c.stats().values())

    print(f"\n⚡ Creating {BURST} products concurrently...")
    created = await asyncio.gather(*(create_one(c, i) for i in range(BURST)))
    created = [p for p in created if p]
    ids = {p["id"] for p in created}
    print(f"✅ {len(created)} created, {len(ids)} distinct ids")

    stats = c.stats()
    print("📊 Stats:", stats)
    print(f"Total now {sum(stats.values())} (was {before})")

    print("\n🗑️  Deleting them concurrently...")
    await asyncio.gather(*(c.delete_product_async(pid) for pid in ids))
    print(f"Total after cleanup: {sum(c.stats().values())}")


if __name__ == "__main__":
    asyncio.run(main())

#!/usr/bin/env python
import os

from products_sdk.client import ProductsApiError, ProductsClient


def main():
    c = ProductsClient(
        base_url=os.getenv("PRODUCTS_API_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("PRODUCTS_API_KEY", "mysecretapikey"),
    )

    print(c.hello())

    # -----------------------------
    # Create
    # -----------------------------
    print("\nCreating a product...")
    pen = c.create_product("Pen", "Blue ink", 1.5, "Stationery", True)
    print(pen)
    pid = pen["id"]

    # -----------------------------
    # Read back
    # -----------------------------
    print("\nFetching it by id...")
    print(c.get_product(pid))

    # -----------------------------
    # Update
    # -----------------------------
    print("\nUpdating description, price and stock...")
    print(c.update_product(pid, "Pen", "Black ink", 1.75, "Stationery", False))

    # -----------------------------
    # Listing, search and stats
    # -----------------------------
    c.create_product("Red Mug", "Ceramic", 8, "Kitchen", True)
    print("\nListing Stationery products...")
    print(c.list_products(category="stationery"))
    print("\nSearching for 'mug'...")
    print(c.search_products("mug"))
    print("\nStats...")
    print(c.stats())

    # -----------------------------
    # Delete, then the id is gone
    # -----------------------------
    print("\nDeleting...")
    c.delete_product(pid)
    try:
        c.get_product(pid)
    except ProductsApiError as e:
        print(f"After delete: {e}")


if __name__ == "__main__":
    main()

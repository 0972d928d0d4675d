#!/usr/bin/env python
import os
from concurrent.futures import ThreadPoolExecutor

from sdk.client import ProductClient


def make_client() -> ProductClient:
    return ProductClient(base_url=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"),
                         api_key=os.getenv("API_KEY"))


def create_mug(i: int):
    # One client per call: a requests.Session is not shared across threads.
    return make_client().create_product(f"Mug {i}", "Ceramic mug", 8, "kitchen", True)


def main():
    c = make_client()

    print(c.hello())

    # -----------------------------
    # Seed data
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    print("\nStats per category...")
    print(c.stats())

    # -----------------------------
    # Create / update / delete
    # -----------------------------
    print("\nCreating a product...")
    kettle = c.create_product("Kettle", "1.7L", 30, "kitchen", True)
    print(kettle)

    print("\nMarking it out of stock...")
    print(c.update_product(kettle["id"], "Kettle", "1.7L", 30, "kitchen", False))

    print("\nFiltering kitchen products containing 'ke'...")
    print(c.list_products(category="Kitchen", search="ke"))

    # -----------------------------
    # Parallel creates
    # -----------------------------
    print("\nCreating 10 products in parallel...")
    with ThreadPoolExecutor(max_workers=5) as pool:
        created = list(pool.map(create_mug, range(10)))
    print(f"{len({p['id'] for p in created})} distinct ids")

    print("\nPage 2 of kitchen products (limit 5)...")
    print(c.list_products(category="kitchen", page=2, limit=5))

    print("\nDeleting the kettle...")
    print(c.delete_product(kettle["id"]))


if __name__ == "__main__":
    main()

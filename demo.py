#!/usr/bin/env python
import os
from catalog.config import DEFAULT_API_KEY
from catalog_sdk.client import CatalogClient, CatalogAPIError

def main():
    c = CatalogClient(
        base_url=os.getenv("CATALOG_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", DEFAULT_API_KEY),
    )

    print(c.welcome())

    # -----------------------------
    # List / filter / paginate
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())
    print("\nElectronics, 1 per page, page 2...")
    print(c.list_products(category="electronics", page=2, limit=1))

    # -----------------------------
    # Search + stats
    # -----------------------------
    print("\nSearching for 'laptop'...")
    print(c.search_products("laptop"))
    print("\nStats...")
    print(c.get_stats())

    # -----------------------------
    # Create / update / delete
    # -----------------------------
    print("\nCreating a product...")
    created = c.create_product("Mug", "Ceramic", 10, "kitchen")
    print(created)
    pid = created["product"]["id"]

    print("\nUpdating price and stock...")
    print(c.update_product(pid, price=12.5, in_stock=False))

    print("\nDeleting it...")
    print(c.delete_product(pid))

    # -----------------------------
    # Errors come back as CatalogAPIError
    # -----------------------------
    try:
        c.get_product(pid)
    except CatalogAPIError as e:
        print(f"\nFetching deleted product -> {e.status_code} {e.name}: {e.message}")

    try:
        CatalogClient(base_url=c.base_url).create_product("Nope", "No key", 1, "misc")
    except CatalogAPIError as e:
        print(f"Creating without a key -> {e.status_code} {e.name}: {e.message}")

if __name__ == "__main__":
    main()

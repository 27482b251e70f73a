from typing import Any, Dict, Iterable, List, Optional

from .models import Product

# This file holds the in-memory product store and its seed data.
#
# Handlers run on a single event loop and never await inside a store
# call, so no locking is done here.  A multi-threaded server would need
# a mutex around every method below.

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    },
]


def seed_products() -> List[Product]:
    return [Product.model_validate(p) for p in SEED_PRODUCTS]


class ProductStore:
    """Ordered, in-memory collection of products keyed by unique id."""

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products: List[Product] = []
        self.reset(seed_products() if products is None else products)

    def __len__(self) -> int:
        return len(self._products)

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return -1

    def reset(self, products: Iterable[Product]) -> None:
        fresh = list(products)
        ids = [p.id for p in fresh]
        if len(set(ids)) != len(ids):
            raise ValueError("product ids must be unique")
        self._products = fresh

    def all(self) -> List[Product]:
        return list(self._products)

    def get(self, product_id: str) -> Optional[Product]:
        i = self._index_of(product_id)
        return self._products[i] if i >= 0 else None

    def insert(self, product: Product) -> Product:
        if self._index_of(product.id) >= 0:
            raise ValueError(f"duplicate product id: {product.id}")
        self._products.append(product)
        return product

    def update(self, product_id: str, changes: Dict[str, Any]) -> Optional[Product]:
        i = self._index_of(product_id)
        if i < 0:
            return None
        changes = {k: v for k, v in changes.items() if k != "id"}
        updated = self._products[i].model_copy(update=changes)
        self._products[i] = updated
        return updated

    def remove(self, product_id: str) -> Optional[Product]:
        i = self._index_of(product_id)
        if i < 0:
            return None
        return self._products.pop(i)

import math
import re
import uuid
from typing import Optional, Dict, List

from .core import ProductIn, ProductUpdate, _make_product, _product_json
from .database import ProductStore
from .errors import Ok, Outcome, NotFoundError, ValidationError
from .models import Product

# This file contains the core logic for all API endpoints.
# Every function returns an Outcome: Ok(...) on success, an error value otherwise.

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

def _parse_positive_int(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    # leading integer prefix, so "2.5" -> 2 and "3abc" -> 3
    match = _LEADING_INT.match(raw)
    if match is None:
        return default
    value = int(match.group(1))
    return value if value >= 1 else default

def _not_found(product_id: str) -> NotFoundError:
    return NotFoundError(f"Product with ID {product_id} not found")

# Product listing
def list_products_logic(
    store: ProductStore,
    category: Optional[str] = None,
    in_stock: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Outcome:
    filtered: List[Product] = store.all()
    if category:
        wanted = category.lower()
        filtered = [p for p in filtered if p.category.lower() == wanted]
    if in_stock is not None:
        flag = in_stock == "true"
        filtered = [p for p in filtered if p.in_stock == flag]

    page_no = _parse_positive_int(page, DEFAULT_PAGE)
    per_page = _parse_positive_int(limit, DEFAULT_LIMIT)
    start = (page_no - 1) * per_page
    end = start + per_page
    total = len(filtered)

    return Ok({
        "products": [_product_json(p) for p in filtered[start:end]],
        "currentPage": page_no,
        "totalPages": math.ceil(total / per_page),
        "totalProducts": total,
        "hasNext": end < total,
        "hasPrevious": page_no > 1,
    })

def search_products_logic(store: ProductStore, q: Optional[str]) -> Outcome:
    if not q:
        return ValidationError('Search query parameter "q" is required')
    term = q.lower()
    results = [
        _product_json(p) for p in store.all()
        if term in p.name.lower() or term in p.description.lower()
    ]
    return Ok({"query": q, "results": results, "count": len(results)})

def product_stats_logic(store: ProductStore) -> Outcome:
    products = store.all()
    categories: Dict[str, int] = {}
    for p in products:
        categories[p.category] = categories.get(p.category, 0) + 1
    in_stock = sum(1 for p in products if p.in_stock)

    average = 0
    if products:
        average = sum(p.price for p in products) / len(products)

    return Ok({
        "totalProducts": len(products),
        "inStock": in_stock,
        "outOfStock": len(products) - in_stock,
        "categories": categories,
        "averagePrice": average,
    })

def get_product_logic(store: ProductStore, product_id: str) -> Outcome:
    p = store.get(product_id)
    if p is None:
        return _not_found(product_id)
    return Ok(_product_json(p))

# Write endpoints (authenticated + validated by the route before we get here)
def create_product_logic(store: ProductStore, payload: ProductIn) -> Outcome:
    product = store.insert(_make_product(str(uuid.uuid4()), payload))
    return Ok(
        {"message": "Product created successfully", "product": _product_json(product)},
        status_code=201,
    )

def update_product_logic(store: ProductStore, product_id: str, payload: ProductUpdate) -> Outcome:
    updated = store.update(product_id, payload.changes())
    if updated is None:
        return _not_found(product_id)
    return Ok({"message": "Product updated successfully", "product": _product_json(updated)})

def delete_product_logic(store: ProductStore, product_id: str) -> Outcome:
    removed = store.remove(product_id)
    if removed is None:
        return _not_found(product_id)
    return Ok({"message": "Product deleted successfully", "product": _product_json(removed)})

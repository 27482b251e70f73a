# tests/test_logic.py
import math

import pytest

from catalog.core import ProductIn, ProductUpdate
from catalog.database import ProductStore
from catalog.errors import NotFoundError, Ok, ValidationError
from catalog.logic import (
    create_product_logic, delete_product_logic, get_product_logic,
    list_products_logic, search_products_logic, update_product_logic,
)
from catalog.models import Product


@pytest.fixture
def seven():
    return ProductStore([
        Product(id=str(i), name=f"Item {i}", description="thing", price=i,
                category="odd" if i % 2 else "even", in_stock=i < 4)
        for i in range(7)
    ])


@pytest.mark.parametrize("limit", [1, 2, 3, 4, 10])
@pytest.mark.parametrize("page", [1, 2, 3, 4])
def test_pagination_invariants(seven, page, limit):
    outcome = list_products_logic(seven, page=str(page), limit=str(limit))
    assert isinstance(outcome, Ok)
    body = outcome.value
    assert len(body["products"]) <= limit
    assert body["totalPages"] == math.ceil(7 / limit)
    assert body["hasNext"] == (page * limit < 7)
    assert body["hasPrevious"] == (page > 1)
    assert [p["id"] for p in body["products"]] == [str(i) for i in range(7)][(page - 1) * limit:page * limit]


def test_filters_combine(seven):
    body = list_products_logic(seven, category="Odd", in_stock="true").value
    assert [p["id"] for p in body["products"]] == ["1", "3"]
    assert body["totalProducts"] == 2


def test_no_upper_bound_on_limit(seven):
    body = list_products_logic(seven, limit="100000").value
    assert len(body["products"]) == 7
    assert body["totalPages"] == 1


def test_expected_failures_are_returned_not_raised(seven):
    assert isinstance(search_products_logic(seven, None), ValidationError)
    assert isinstance(get_product_logic(seven, "x"), NotFoundError)
    assert isinstance(update_product_logic(seven, "x", ProductUpdate(price=1)), NotFoundError)
    assert isinstance(delete_product_logic(seven, "x"), NotFoundError)


def test_create_outcome_is_201_with_fresh_id(seven):
    outcome = create_product_logic(seven, ProductIn(name="n", description="d", price=3, category="c"))
    assert outcome.status_code == 201
    product = outcome.value["product"]
    assert product["inStock"] is True
    assert product["id"] not in {str(i) for i in range(7)}
    assert len(seven) == 8


def test_update_uses_explicit_presence(seven):
    payload = ProductUpdate.model_validate({"price": 0, "inStock": True})
    assert payload.changes() == {"price": 0, "in_stock": True}
    product = update_product_logic(seven, "5", payload).value["product"]
    assert product["price"] == 0
    assert product["inStock"] is True
    assert product["name"] == "Item 5"


@pytest.mark.parametrize("raw,expected", [("3abc", 3), ("2.5", 2), ("+4", 4), ("abc", 10), ("-2", 10), ("0", 10)])
def test_limit_reads_leading_integer_prefix(seven, raw, expected):
    assert list_products_logic(seven, limit=raw).value["totalPages"] == math.ceil(7 / expected)

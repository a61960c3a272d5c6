import pandas as pd
import pytest

from techstore.core.pagination import page_bounds, total_pages
from techstore.core.sorting import SortPolicy, resolve_sort
from techstore.schemas.catalog import SortKey


@pytest.mark.parametrize(
    "total,size,expected",
    [(0, 12, 1), (1, 12, 1), (12, 12, 1), (13, 12, 2), (25, 10, 3), (30, 10, 3), (31, 10, 4)],
)
def test_total_pages(total, size, expected):
    assert total_pages(total, size) == expected


def test_total_pages_needs_a_positive_size():
    with pytest.raises(ValueError):
        total_pages(10, 0)


def test_page_bounds():
    assert page_bounds(1, 10) == (0, 10)
    assert page_bounds(3, 10) == (20, 10)
    assert page_bounds(0, 10) == (0, 10)


@pytest.fixture
def frame():
    return pd.DataFrame([
        {"id": "p3", "name": "beta", "price": 20},
        {"id": "p1", "name": "alpha", "price": 20},
        {"id": "p2", "name": "gamma", "price": 10},
        {"id": "p0", "name": "alpha", "price": 30},
    ])


def test_resolve_sort_accepts_strings():
    assert resolve_sort("PRICE", True) == SortPolicy(SortKey.PRICE, True)
    assert resolve_sort("popularity").key is SortKey.NONE
    assert resolve_sort(None).key is SortKey.NONE


def test_no_sort_keeps_storage_order(frame):
    assert list(resolve_sort(SortKey.NONE).apply(frame)["id"]) == ["p3", "p1", "p2", "p0"]


def test_sort_by_name_breaks_ties_on_id(frame):
    assert list(resolve_sort("name").apply(frame)["id"]) == ["p0", "p1", "p3", "p2"]


def test_sort_by_price(frame):
    assert list(resolve_sort("price").apply(frame)["id"]) == ["p2", "p1", "p3", "p0"]


def test_descending_only_flips_the_primary_key(frame):
    # equal prices stay in id order
    assert list(resolve_sort("price", descending=True).apply(frame)["id"]) == ["p0", "p1", "p3", "p2"]
    assert list(resolve_sort("name", descending=True).apply(frame)["id"]) == ["p2", "p3", "p0", "p1"]

from techstore.core.criteria import build_criteria
from techstore.core.predicates import compile_predicate
from techstore.core.sorting import resolve_sort
from techstore.database import db as file_db

from conftest import make_product


def test_missing_tables_read_as_empty(store):
    predicate = compile_predicate(build_criteria())
    assert store.count_products(predicate) == 0
    assert store.query_products(predicate, resolve_sort(None), 0, 10) == ([], 0)
    assert store.sum_quantity_grouped_by_product() == {}
    assert store.query_images_by_product("p1") == []
    assert store.lookup_products_by_ids(["p1"]) == {}


def test_query_products_returns_page_and_match_count(sample_catalog, store):
    predicate = compile_predicate(build_criteria({"category_id": "c1"}))
    items, matched = store.query_products(predicate, resolve_sort("price"), 1, 2)
    assert matched == 3
    assert [p.id for p in items] == ["p4", "p1"]
    assert items[1].price == 500
    assert items[1].is_deleted is False


def test_products_are_typed(sample_catalog, store):
    product = store.get_product("p2")
    assert product.price == 1300
    assert product.quantity == 10
    assert product.guarantee_period == 12
    assert product.serial_name == "AR14"


def test_lookup_skips_deleted_products(sample_catalog, store):
    found = store.lookup_products_by_ids(["p1", "p6", "missing"])
    assert set(found) == {"p1"}


def test_images_grouped_by_product(sample_catalog, store):
    grouped = store.query_images_by_products(["p1", "p5"])
    assert [i.href for i in grouped["p1"]] == ["/img/p1/front.jpg", "/img/p1/back.jpg"]
    assert grouped["p5"] == []
    assert store.query_images_by_product("p2") == ["/img/p2/front.jpg"]


def test_sum_quantity_grouped_by_product(seed, store):
    seed(order_lines=[
        {"id": "l1", "product_id": "a", "quantity": 2},
        {"id": "l2", "product_id": "b", "quantity": 5},
        {"id": "l3", "product_id": "a", "quantity": 4},
    ])
    assert store.sum_quantity_grouped_by_product() == {"a": 6, "b": 5}


def test_category_and_supplier_lookup(sample_catalog, store):
    assert store.get_category("c2").name == "Laptops"
    assert store.get_supplier("s2").name == "Northwind"
    assert store.get_category(None) is None
    assert store.get_supplier("zzz") is None



def test_rows_with_unreadable_price_are_left_out(seed, store, caplog):
    seed(products=[make_product("p1", price=100), make_product("p2", price="abc"), make_product("p3", price=0)])
    predicate = compile_predicate(build_criteria())
    with caplog.at_level("WARNING", logger="techstore.db.catalog_store"):
        items, matched = store.query_products(predicate, resolve_sort(None), 0, 10)
    assert [p.id for p in items] == ["p1", "p3"]
    assert matched == 2
    assert store.get_product("p2") is None
    assert "p2" in caplog.text


def test_get_record_matches_on_string_value(seed):
    seed(products=[make_product("p1"), make_product("p3")])
    assert file_db.get_record("products", "id", "p3")["name"] == "Product p3"
    assert file_db.get_record("products", "id", "nope") is None
    assert file_db.get_record("products", "sku", "p1") is None

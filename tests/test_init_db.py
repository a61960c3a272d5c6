from scripts import init_db
from techstore.services.catalog import get_product, list_products
from techstore.services.top_sellers import top_sellers


def test_seeded_catalog_is_queryable(temp_data_dir, store):
    init_db.main()
    assert (temp_data_dir / "products.csv").exists()

    listing = list_products({"sort_key": "price"}, store=store)
    assert [p.id for p in listing.products] == ["p-003", "p-002", "p-001"]

    ranking = top_sellers(5, store=store)
    assert [(e.product_id, e.total_quantity_sold) for e in ranking] == [("p-003", 5), ("p-001", 1)]
    assert [i.href for i in ranking[1].images] == [
        "/static/images/products/p-001/front.jpg",
        "/static/images/products/p-001/side.jpg",
    ]

    assert get_product("p-002", store=store).category_name == "Cameras"


def test_seeding_twice_keeps_existing_tables(temp_data_dir, capsys):
    init_db.main()
    init_db.main()
    assert "products already exists" in capsys.readouterr().out

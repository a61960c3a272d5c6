"""Creates the catalog tables in DATA_DIR with a small sample catalog."""
import pandas as pd

from techstore.database import db
from techstore.models.order import OrderLine
from techstore.models.product import Category, Image, Product, Supplier


CATEGORIES = [
    Category("c-laptop", "Laptops"),
    Category("c-camera", "Cameras"),
    Category("c-audio", "Audio"),
]

SUPPLIERS = [
    Supplier("s-north", "Northwind Electronics"),
    Supplier("s-acme", "Acme Imports"),
]

PRODUCTS = [
    Product("p-001", "Aero 14", "AR14-2024", "14 inch ultrabook", price=1299, quantity=12,
            guarantee_period=24, supplier_id="s-north", category_id="c-laptop"),
    Product("p-002", "Camera X", "CX-100", "Mirrorless body", price=899, quantity=5,
            guarantee_period=12, supplier_id="s-acme", category_id="c-camera"),
    Product("p-003", "Studio Buds", "SB-2", "Noise cancelling earbuds", price=149, quantity=40,
            guarantee_period=12, supplier_id="s-acme", category_id="c-audio"),
    Product("p-004", "Aero 13 (old)", "AR13-2019", "Discontinued", price=999, quantity=0,
            guarantee_period=12, supplier_id="s-north", category_id="c-laptop", is_deleted=True),
]

IMAGES = [
    Image("i-001", "p-001", "/static/images/products/p-001/front.jpg"),
    Image("i-002", "p-001", "/static/images/products/p-001/side.jpg"),
    Image("i-003", "p-002", "/static/images/products/p-002/front.jpg"),
]

ORDER_LINES = [
    OrderLine("ol-001", "p-003", quantity=3, order_id="o-001", unit_price=149),
    OrderLine("ol-002", "p-001", quantity=1, order_id="o-001", unit_price=1299),
    OrderLine("ol-003", "p-003", quantity=2, order_id="o-002", unit_price=149),
    # lines of a product that was deleted later; ranking skips them
    OrderLine("ol-004", "p-004", quantity=7, order_id="o-003", unit_price=999),
]

SEED = {
    "categories": CATEGORIES,
    "suppliers": SUPPLIERS,
    "products": PRODUCTS,
    "images": IMAGES,
    "order_lines": ORDER_LINES,
}


def main():
    db.data_dir.mkdir(parents=True, exist_ok=True)
    for table, rows in SEED.items():
        if db.table_exists(table):
            print(f"{table} already exists")
            continue
        db.write_table(table, pd.DataFrame([r.to_dict() for r in rows]))
        print(f"Created {table} with {len(rows)} rows")


if __name__ == "__main__":
    main()

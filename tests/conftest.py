# tests/conftest.py
import os
import sys
from typing import Any, Dict, List

import pandas as pd
import pytest
from fastapi.testclient import TestClient

# ensure project root is importable
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from techstore.database import db as file_db  # noqa: E402
from techstore.db.catalog_store import CatalogStore  # noqa: E402
from techstore.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def temp_data_dir(tmp_path, monkeypatch):
    """
    Point the file-backed db at an empty per-test directory so tests never
    see each other's tables or local developer data.
    """
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    monkeypatch.setattr(file_db, "data_dir", data_dir)
    return data_dir


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def store():
    return CatalogStore(file_db)


def make_product(pid: str, name: str = None, price: int = 100, **extra: Any) -> Dict[str, Any]:
    row = {
        "id": pid,
        "name": name or f"Product {pid}",
        "serial_name": f"SN-{pid}",
        "detail": "",
        "price": price,
        "quantity": 10,
        "guarantee_period": 12,
        "supplier_id": "s1",
        "category_id": "c1",
        "is_deleted": False,
    }
    row.update(extra)
    return row


@pytest.fixture
def seed():
    """
    Write whole tables in one go.
    Usage: seed(products=[make_product("p1")], order_lines=[...])
    """
    def _fn(**tables: List[Dict[str, Any]]):
        for table, rows in tables.items():
            file_db.write_table(table, pd.DataFrame(rows))
    return _fn


@pytest.fixture
def sample_catalog(seed):
    """
    Small catalog: two categories, two suppliers, five live products, one deleted.
    """
    seed(
        categories=[
            {"id": "c1", "name": "Cameras"},
            {"id": "c2", "name": "Laptops"},
        ],
        suppliers=[
            {"id": "s1", "name": "Acme Imports"},
            {"id": "s2", "name": "Northwind"},
        ],
        products=[
            make_product("p1", "Camera X", 500, category_id="c1", supplier_id="s1", detail="mirrorless"),
            make_product("p2", "Aero 14", 1300, category_id="c2", supplier_id="s2", serial_name="AR14"),
            make_product("p3", "Tripod", 80, category_id="c1", supplier_id="s2", detail="fits any cam body"),
            make_product("p4", "Bag", 80, category_id="c1", supplier_id="s1"),
            make_product("p5", "Dock", 200, category_id="c2", supplier_id="s1"),
            make_product("p6", "Old Camera", 300, category_id="c1", supplier_id="s1", is_deleted=True),
        ],
        images=[
            {"id": "i1", "product_id": "p1", "href": "/img/p1/front.jpg"},
            {"id": "i2", "product_id": "p1", "href": "/img/p1/back.jpg"},
            {"id": "i3", "product_id": "p2", "href": "/img/p2/front.jpg"},
            {"id": "i4", "product_id": "p6", "href": "/img/p6/front.jpg"},
        ],
    )

# techstore/db/catalog_store.py
"""
Read-only catalog queries over the file-backed tables.

CatalogStore is the only place that knows how products, categories, suppliers,
images and order lines are laid out on disk. Everything above it talks to the
EntityStore protocol, so tests can swap in another implementation.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

import pandas as pd

from techstore.core.predicates import CompiledPredicate
from techstore.core.sorting import SortPolicy
from techstore.database import FileBackedDB, db as default_db
from techstore.models.product import Category, Image, Product, Supplier, _to_bool

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = (
    "id", "name", "serial_name", "detail", "price", "quantity", "guarantee_period",
    "supplier_id", "category_id", "is_deleted",
)
NUMERIC_COLUMNS = ("price", "quantity", "guarantee_period")


class EntityStore(Protocol):
    """Read capability the catalog services need from storage."""

    def query_products(
        self, predicate: CompiledPredicate, sort: SortPolicy, skip: int, take: int
    ) -> Tuple[List[Product], int]:
        ...

    def count_products(self, predicate: CompiledPredicate) -> int:
        ...

    def query_images_by_product(self, product_id: str) -> List[str]:
        ...

    def query_images_by_products(self, product_ids: Iterable[str]) -> Dict[str, List[Image]]:
        ...

    def sum_quantity_grouped_by_product(self) -> Dict[str, int]:
        ...

    def lookup_products_by_ids(self, product_ids: Iterable[str]) -> Dict[str, Product]:
        ...

    def get_product(self, product_id: str) -> Optional[Product]:
        ...

    def get_category(self, category_id: str) -> Optional[Category]:
        ...

    def get_supplier(self, supplier_id: str) -> Optional[Supplier]:
        ...


class CatalogStore:
    """
    EntityStore backed by a FileBackedDB. Every call reads the tables it needs
    fresh from disk and keeps nothing between calls.
    """

    def __init__(self, db: Optional[FileBackedDB] = None):
        self.db = db or default_db

    # --- frames ---

    def _products_frame(self) -> pd.DataFrame:
        """
        Products typed for filtering, joined with their category display name.
        """
        df = self.db.read_table("products")
        if df.empty:
            return pd.DataFrame(columns=list(PRODUCT_COLUMNS) + ["category_name"])
        for col in PRODUCT_COLUMNS:
            if col not in df.columns:
                df[col] = ""
        df = df.fillna("")

        # rows without a readable price are left out of every read
        prices = pd.to_numeric(df["price"], errors="coerce")
        unpriced = prices.isna()
        if unpriced.any():
            logger.warning("Skipping %d product rows with an unreadable price: %s",
                           int(unpriced.sum()), df.loc[unpriced, "id"].tolist())
            df = df.loc[~unpriced].copy()
            prices = prices.loc[~unpriced]
        df["price"] = prices.astype(int)
        for col in NUMERIC_COLUMNS:
            if col != "price":
                df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0).astype(int)
        df["is_deleted"] = df["is_deleted"].map(_to_bool).astype(bool)
        df["id"] = df["id"].astype(str)

        categories = self.db.read_table("categories")
        if categories.empty or not {"id", "name"} <= set(categories.columns):
            df["category_name"] = ""
            return df
        names = categories.drop_duplicates("id").set_index("id")["name"]
        df["category_name"] = df["category_id"].map(names).fillna("")
        return df

    def _images_frame(self) -> pd.DataFrame:
        df = self.db.read_table("images")
        if df.empty:
            return pd.DataFrame(columns=["id", "product_id", "href"])
        return df.fillna("")

    @staticmethod
    def _rows_to_products(frame: pd.DataFrame) -> List[Product]:
        return [Product.from_dict(row) for row in frame[list(PRODUCT_COLUMNS)].to_dict(orient="records")]

    # --- listing ---

    def count_products(self, predicate: CompiledPredicate) -> int:
        return int(len(predicate(self._products_frame())))

    def query_products(
        self, predicate: CompiledPredicate, sort: SortPolicy, skip: int, take: int
    ) -> Tuple[List[Product], int]:
        """
        Filter, order and slice products. Returns the page and the number of
        rows that matched before slicing.
        """
        matched = sort.apply(predicate(self._products_frame()))
        logger.debug("query_products matched=%d skip=%d take=%d", len(matched), skip, take)
        page = matched.iloc[skip: skip + take]
        return self._rows_to_products(page), int(len(matched))

    # --- images ---

    def query_images_by_product(self, product_id: str) -> List[str]:
        return [img.href for img in self.query_images_by_products([product_id]).get(str(product_id), [])]

    def query_images_by_products(self, product_ids: Iterable[str]) -> Dict[str, List[Image]]:
        ids = [str(pid) for pid in product_ids]
        out: Dict[str, List[Image]] = {pid: [] for pid in ids}
        if not ids:
            return out
        images = self._images_frame()
        if images.empty or "product_id" not in images.columns:
            return out
        wanted = images[images["product_id"].astype(str).isin(ids)]
        for row in wanted.to_dict(orient="records"):
            img = Image.from_dict(row)
            out[img.product_id].append(img)
        return out

    # --- aggregation ---

    def sum_quantity_grouped_by_product(self) -> Dict[str, int]:
        lines = self.db.read_table("order_lines")
        if lines.empty or not {"product_id", "quantity"} <= set(lines.columns):
            return {}
        lines = lines.assign(quantity=pd.to_numeric(lines["quantity"], errors="coerce"))
        lines = lines[lines["quantity"] > 0]
        if lines.empty:
            return {}
        totals = lines.groupby(lines["product_id"].astype(str), sort=False)["quantity"].sum()
        return {pid: int(qty) for pid, qty in totals.items()}

    # --- lookups ---

    def lookup_products_by_ids(self, product_ids: Iterable[str]) -> Dict[str, Product]:
        """
        Non-deleted products for the given ids; unknown or deleted ids are absent.
        """
        ids = {str(pid) for pid in product_ids}
        if not ids:
            return {}
        df = self._products_frame()
        if df.empty:
            return {}
        found = df[df["id"].isin(ids) & ~df["is_deleted"]]
        return {p.id: p for p in self._rows_to_products(found)}

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.lookup_products_by_ids([product_id]).get(str(product_id))

    def get_category(self, category_id: Optional[str]) -> Optional[Category]:
        if not category_id:
            return None
        row = self.db.get_record("categories", "id", category_id)
        return Category.from_dict(row) if row else None

    def get_supplier(self, supplier_id: Optional[str]) -> Optional[Supplier]:
        if not supplier_id:
            return None
        row = self.db.get_record("suppliers", "id", supplier_id)
        return Supplier.from_dict(row) if row else None

# techstore/api/deps.py
from techstore.db.catalog_store import CatalogStore
from techstore.database import db


def get_store() -> CatalogStore:
    """
    Dependency that returns the catalog store over the file-backed DB.
    Usage:
        store = Depends(get_store)
    """
    return CatalogStore(db)

# techstore/database.py
"""
File-backed relational store using CSV (preferred) or Excel (xlsx) as storage.
Every table is one file inside DATA_DIR; rows are read back as strings and
typed by the model classes in techstore.models. A per-file lock guards writes,
and reads take the same lock so they never see a half-written file.

Usage:
    from techstore.database import db
    db.read_table("products")
    db.get_record("products", "id", "p-001")
"""

from pathlib import Path
from typing import Any, Dict, Optional
import logging
import pandas as pd
from filelock import FileLock
from techstore.config import settings

logger = logging.getLogger(__name__)

TABLES = ("products", "categories", "suppliers", "images", "order_lines")


class FileBackedDB:
    """
    Manages CSV / Excel files inside data_dir.
    Table name corresponds to a file name in settings (or you may pass full filename).
    """

    def __init__(self, data_dir: Optional[Path] = None, lock_timeout: Optional[float] = None):
        self.data_dir = Path(data_dir if data_dir is not None else settings.DATA_DIR)
        self.lock_timeout = settings.LOCK_TIMEOUT if lock_timeout is None else lock_timeout

    def _file_path(self, table: str) -> Path:
        """
        Resolve table -> file path. If table looks like a filename (has .csv/.xlsx),
        use it directly (relative to data_dir). Otherwise try config mapping,
        else fallback to table + .csv
        """
        if table.endswith(".csv") or table.endswith(".xlsx"):
            return self.data_dir / Path(table)

        mapping = {
            "products": settings.PRODUCTS_FILE,
            "categories": settings.CATEGORIES_FILE,
            "suppliers": settings.SUPPLIERS_FILE,
            "images": settings.IMAGES_FILE,
            "order_lines": settings.ORDER_LINES_FILE,
        }
        filename = mapping.get(table, f"{table}.csv")
        return self.data_dir / Path(filename)

    def _lock_for(self, path: Path) -> FileLock:
        return FileLock(str(path) + ".lock", timeout=self.lock_timeout)

    def _read_df_nolock(self, path: Path) -> pd.DataFrame:
        if not path.exists():
            return pd.DataFrame()
        if path.suffix.lower() in (".xls", ".xlsx"):
            return pd.read_excel(path, dtype=str).fillna("")
        # CSV preferred, also the default for unknown extensions
        try:
            return pd.read_csv(path, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            return pd.DataFrame()

    def _write_df_nolock(self, path: Path, df: pd.DataFrame) -> None:
        """
        Write DataFrame to `path` WITHOUT acquiring file lock.
        Use this only when the caller already holds the lock.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() in (".xls", ".xlsx"):
            df.to_excel(path, index=False)
        else:
            df.to_csv(path, index=False)

    # --- table access ---

    def table_exists(self, table: str) -> bool:
        return self._file_path(table).exists()

    def read_table(self, table: str) -> pd.DataFrame:
        """
        Return the whole table as a string-typed DataFrame (empty if the file is missing).
        """
        path = self._file_path(table)
        if not path.exists():
            logger.debug("Table %s has no file at %s", table, path)
            return pd.DataFrame()
        with self._lock_for(path):
            return self._read_df_nolock(path)

    def write_table(self, table: str, df: pd.DataFrame) -> None:
        path = self._file_path(table)
        path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock_for(path):
            self._write_df_nolock(path, df)

    # --- record lookup ---

    def get_record(self, table: str, key: str, value: Any) -> Optional[Dict[str, Any]]:
        df = self.read_table(table)
        if df.empty or key not in df.columns:
            return None
        # treat everything as string for comparison simplicity
        mask = df[key].astype(str) == str(value)
        if not mask.any():
            return None
        return df[mask].iloc[0].to_dict()


# module-level singleton for convenience
db = FileBackedDB()

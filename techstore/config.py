# techstore/config.py
from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from pathlib import Path
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    ENV: str = "development"
    DATA_DIR: Path = Path("data")  # where the CSV / XLSX tables live
    PRODUCTS_FILE: str = "products.csv"
    CATEGORIES_FILE: str = "categories.csv"
    SUPPLIERS_FILE: str = "suppliers.csv"
    IMAGES_FILE: str = "images.csv"
    ORDER_LINES_FILE: str = "order_lines.csv"

    # seconds to wait for a table lock; -1 waits forever
    LOCK_TIMEOUT: float = -1

    # listing / ranking bounds
    DEFAULT_PAGE_SIZE: int = 12
    MAX_PAGE_SIZE: int = 100
    DEFAULT_TOP_SELLERS: int = 10
    MAX_TOP_SELLERS: int = 50

    CORS_ORIGINS: str = ""
    LOG_LEVEL: str = "INFO"

    # Example .env:
    # DATA_DIR=./data
    # PRODUCTS_FILE=products.xlsx
    # MAX_PAGE_SIZE=48

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()

settings = get_settings()

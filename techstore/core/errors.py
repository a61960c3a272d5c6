from __future__ import annotations

import threading
from typing import Optional


class CatalogError(Exception):
    """Base exception for catalog query operations."""


class CriteriaValidationError(CatalogError, ValueError):
    """Raised when listing or ranking input is malformed or out of range."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ProductNotFound(CatalogError):
    """Raised when a product is unknown or soft-deleted."""


class QueryCancelled(CatalogError):
    pass


def raise_if_cancelled(cancel: Optional[threading.Event], stage: str) -> None:
    """Abort before the next storage call once the caller has set `cancel`."""
    if cancel is not None and cancel.is_set():
        raise QueryCancelled(f"cancelled before {stage}")

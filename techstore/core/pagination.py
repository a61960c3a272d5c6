from __future__ import annotations

import logging
import math
import threading
from typing import Dict, List, Optional

from techstore.core.errors import raise_if_cancelled
from techstore.core.predicates import CompiledPredicate
from techstore.core.sorting import SortPolicy
from techstore.db.catalog_store import EntityStore
from techstore.models.product import Image, Product
from techstore.schemas.catalog import PagedResult, ProductSummary

logger = logging.getLogger(__name__)


def total_pages(total_count: int, page_size: int) -> int:
    """ceil(total / size), never below 1 so an empty listing still has a page."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return max(1, math.ceil(total_count / page_size))


def page_bounds(page_number: int, page_size: int) -> tuple:
    """Return (skip, take) for a 1-based page."""
    return (max(page_number, 1) - 1) * page_size, page_size


def to_summary(product: Product, images: List[Image]) -> ProductSummary:
    return ProductSummary(
        id=product.id,
        name=product.name,
        serial_name=product.serial_name,
        detail=product.detail,
        price=product.price,
        quantity=product.quantity,
        guarantee_period=product.guarantee_period,
        supplier_id=product.supplier_id,
        category_id=product.category_id,
        images=[img.href for img in images],
    )


def paginate(
    store: EntityStore,
    predicate: CompiledPredicate,
    sort: SortPolicy,
    page_number: int,
    page_size: int,
    cancel: Optional[threading.Event] = None,
) -> PagedResult:
    """
    Count everything the predicate matches, then fetch one page of it.

    Images are fetched in one batch for the ids on the returned page only.
    A page past the end comes back empty with the same totals as page 1.
    """
    raise_if_cancelled(cancel, "count")
    total = store.count_products(predicate)

    skip, take = page_bounds(page_number, page_size)
    raise_if_cancelled(cancel, "page fetch")
    items, matched = store.query_products(predicate, sort, skip, take)
    if matched != total:
        # a writer got in between the two reads; the count is kept as reported
        logger.debug("Listing drifted between count (%d) and fetch (%d)", total, matched)

    images: Dict[str, List[Image]] = {}
    if items:
        raise_if_cancelled(cancel, "image fetch")
        images = store.query_images_by_products([p.id for p in items])

    return PagedResult(
        products=[to_summary(p, images.get(p.id, [])) for p in items],
        page_number=page_number,
        page_size=page_size,
        total_pages=total_pages(total, page_size),
        total_products=total,
    )

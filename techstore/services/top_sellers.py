# techstore/services/top_sellers.py
import logging
import threading
from typing import Any, List, Optional

from techstore.core.criteria import validate_top_seller_count
from techstore.core.errors import raise_if_cancelled
from techstore.db.catalog_store import CatalogStore, EntityStore
from techstore.schemas.catalog import ImageOut, TopSellerEntry

logger = logging.getLogger(__name__)


def top_sellers(
    count: Any,
    store: Optional[EntityStore] = None,
    cancel: Optional[threading.Event] = None,
) -> List[TopSellerEntry]:
    """
    Rank products by total quantity sold, highest first.

    Order lines are summed per product, then inner-joined with non-deleted
    products: products never ordered, deleted, or missing from the catalog
    are left out. Equal totals are ordered by product id ascending. Images
    are fetched only for the entries that make the cut.
    """
    count = validate_top_seller_count(count)
    if count == 0:
        return []
    store = store or CatalogStore()

    raise_if_cancelled(cancel, "order line aggregation")
    totals = store.sum_quantity_grouped_by_product()
    if not totals:
        return []

    raise_if_cancelled(cancel, "product lookup")
    products = store.lookup_products_by_ids(totals.keys())

    ranked = sorted(
        ((pid, qty) for pid, qty in totals.items() if pid in products),
        key=lambda pair: (-pair[1], pair[0]),
    )[:count]
    logger.debug("top_sellers: %d ordered products, %d live, returning %d", len(totals), len(products), len(ranked))
    if not ranked:
        return []

    raise_if_cancelled(cancel, "image fetch")
    images = store.query_images_by_products([pid for pid, _ in ranked])

    return [
        TopSellerEntry(
            product_id=pid,
            total_quantity_sold=qty,
            product_name=products[pid].name,
            images=[ImageOut(id=img.id, product_id=img.product_id, href=img.href) for img in images.get(pid, [])],
        )
        for pid, qty in ranked
    ]

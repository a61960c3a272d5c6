# techstore/services/catalog.py
import logging
import threading
from typing import Any, List, Mapping, Optional, Union

from techstore.core.criteria import build_criteria
from techstore.core.errors import ProductNotFound, raise_if_cancelled
from techstore.core.pagination import paginate, to_summary
from techstore.core.predicates import compile_predicate
from techstore.core.sorting import resolve_sort
from techstore.db.catalog_store import CatalogStore, EntityStore
from techstore.schemas.catalog import FilterCriteria, ImageOut, PagedResult, ProductDetail

logger = logging.getLogger(__name__)


def list_products(
    criteria: Union[FilterCriteria, Mapping[str, Any], None] = None,
    store: Optional[EntityStore] = None,
    cancel: Optional[threading.Event] = None,
) -> PagedResult:
    """
    Filtered, sorted, paginated product listing.

    `criteria` may be a FilterCriteria or raw caller input, which is normalized
    first (and may raise CriteriaValidationError). No matches is not an error:
    the result is an empty page with total_pages == 1.
    """
    if not isinstance(criteria, FilterCriteria):
        criteria = build_criteria(criteria)
    store = store or CatalogStore()

    predicate = compile_predicate(criteria)
    sort = resolve_sort(criteria.sort_key, criteria.sort_descending)
    logger.debug("list_products clauses=%s sort=%s page=%d/%d",
                 predicate.names, sort.key.value, criteria.page_number, criteria.page_size)
    return paginate(store, predicate, sort, criteria.page_number, criteria.page_size, cancel=cancel)


def get_product(
    product_id: str,
    store: Optional[EntityStore] = None,
    cancel: Optional[threading.Event] = None,
) -> ProductDetail:
    store = store or CatalogStore()
    raise_if_cancelled(cancel, "product lookup")
    product = store.get_product(product_id)
    if product is None:
        raise ProductNotFound(f"Product {product_id} not found")

    raise_if_cancelled(cancel, "relation lookup")
    supplier = store.get_supplier(product.supplier_id)
    category = store.get_category(product.category_id)
    summary = to_summary(product, [])
    return ProductDetail(
        **summary.model_dump(exclude={"images"}),
        images=store.query_images_by_product(product.id),
        supplier_name=supplier.name if supplier else None,
        category_name=category.name if category else None,
    )


def get_product_images(
    product_id: str,
    store: Optional[EntityStore] = None,
    cancel: Optional[threading.Event] = None,
) -> List[ImageOut]:
    store = store or CatalogStore()
    raise_if_cancelled(cancel, "product lookup")
    product = store.get_product(product_id)
    if product is None:
        raise ProductNotFound(f"Product {product_id} not found")

    raise_if_cancelled(cancel, "image fetch")
    images = store.query_images_by_products([product.id]).get(product.id, [])
    return [ImageOut(id=img.id, product_id=img.product_id, href=img.href) for img in images]

# techstore/api/routes/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from techstore.api.deps import get_store
from techstore.config import settings
from techstore.core.errors import ProductNotFound
from techstore.db.catalog_store import CatalogStore
from techstore.schemas.catalog import ImageOut, PagedResult, ProductDetail, TopSellerEntry
from techstore.services import catalog as catalog_service
from techstore.services.top_sellers import top_sellers

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("/", response_model=PagedResult)
def list_products(
    min_price: Optional[str] = Query(None, description="inclusive lower price bound"),
    max_price: Optional[str] = Query(None, description="inclusive upper price bound"),
    search_key: Optional[str] = Query(None, description="substring of name, serial, detail or category"),
    supplier_id: Optional[str] = None,
    category_id: Optional[str] = None,
    sort_by: Optional[str] = Query(None, description="'name' or 'price'"),
    is_descending: Optional[str] = None,
    page_number: Optional[str] = None,
    page_size: Optional[str] = None,
    store: CatalogStore = Depends(get_store),
):
    """
    Filtered, sorted and paginated product listing. Deleted products never show up.
    Numeric parameters arrive as text so every bad value is reported the same
    way, as a CriteriaValidationError naming the field.
    """
    raw = {
        "min_price": min_price,
        "max_price": max_price,
        "search_key": search_key,
        "supplier_id": supplier_id,
        "category_id": category_id,
        "sort_key": sort_by,
        "sort_descending": is_descending,
        "page_number": page_number,
        "page_size": page_size,
    }
    raw = {k: v for k, v in raw.items() if v is not None}
    return catalog_service.list_products(raw, store=store)


@router.get("/top-sellers", response_model=List[TopSellerEntry])
def get_top_sellers(
    count: Optional[str] = Query(None, description="how many products to return"),
    store: CatalogStore = Depends(get_store),
):
    if count is None:
        count = settings.DEFAULT_TOP_SELLERS
    return top_sellers(count, store=store)


@router.get("/{product_id}", response_model=ProductDetail)
def get_product(product_id: str, store: CatalogStore = Depends(get_store)):
    try:
        return catalog_service.get_product(product_id, store=store)
    except ProductNotFound:
        raise HTTPException(status_code=404, detail="Product not found")


@router.get("/{product_id}/images", response_model=List[ImageOut])
def get_product_images(product_id: str, store: CatalogStore = Depends(get_store)):
    """
    List image records for a product (public).
    """
    try:
        return catalog_service.get_product_images(product_id, store=store)
    except ProductNotFound:
        raise HTTPException(status_code=404, detail="Product not found")

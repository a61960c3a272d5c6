# techstore/schemas/catalog.py
from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from techstore.config import settings


class SortKey(str, Enum):
    NONE = "none"
    NAME = "name"
    PRICE = "price"


class FilterCriteria(BaseModel):
    """
    Normalized listing request. Field names follow the storefront API, and the
    camelCase names the web client sends are accepted as aliases. A min_price
    above max_price is clamped down to max_price, however the model is built.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    max_price: Optional[int] = Field(None, ge=0, validation_alias=AliasChoices("max_price", "maxPrice"))
    min_price: int = Field(0, ge=0, validation_alias=AliasChoices("min_price", "minPrice"))
    search_key: Optional[str] = Field(None, validation_alias=AliasChoices("search_key", "searchKey"))
    supplier_id: Optional[str] = Field(None, validation_alias=AliasChoices("supplier_id", "supplierId"))
    category_id: Optional[str] = Field(None, validation_alias=AliasChoices("category_id", "categoryId"))
    sort_key: SortKey = Field(SortKey.NONE, validation_alias=AliasChoices("sort_key", "sort_by", "sortBy"))
    sort_descending: bool = Field(
        False, validation_alias=AliasChoices("sort_descending", "is_descending", "isDescending")
    )
    page_number: int = Field(1, validation_alias=AliasChoices("page_number", "pageNumber"))
    page_size: int = Field(
        default_factory=lambda: settings.DEFAULT_PAGE_SIZE,
        validation_alias=AliasChoices("page_size", "pageSize"),
    )

    @field_validator("search_key", "supplier_id", "category_id", mode="before")
    @classmethod
    def _blank_is_absent(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("min_price", mode="before")
    @classmethod
    def _default_min_price(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return 0
        return v

    @field_validator("max_price", mode="before")
    @classmethod
    def _blank_max_price(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("min_price")
    @classmethod
    def _min_not_above_max(cls, v: int, info: ValidationInfo) -> int:
        # max_price is declared first, so it is already in info.data when valid
        max_price = info.data.get("max_price")
        if max_price is not None and v > max_price:
            return max_price
        return v

    @field_validator("sort_key", mode="before")
    @classmethod
    def _known_sort_key(cls, v: Any) -> SortKey:
        if isinstance(v, SortKey):
            return v
        key = str(v or "").strip().lower()
        try:
            return SortKey(key)
        except ValueError:
            # unknown keys leave the storage order untouched
            return SortKey.NONE

    @field_validator("page_number", mode="before")
    @classmethod
    def _blank_page_number(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return 1
        return v

    @field_validator("page_number")
    @classmethod
    def _clamp_page_number(cls, v: int) -> int:
        return v if v >= 1 else 1

    @field_validator("page_size", mode="before")
    @classmethod
    def _blank_page_size(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return settings.DEFAULT_PAGE_SIZE
        return v

    @field_validator("page_size")
    @classmethod
    def _bounded_page_size(cls, v: int) -> int:
        if v < 1:
            return settings.DEFAULT_PAGE_SIZE
        if v > settings.MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be at most {settings.MAX_PAGE_SIZE}")
        return v


class ImageOut(BaseModel):
    id: str
    product_id: str
    href: str


class ProductSummary(BaseModel):
    id: str
    name: str
    serial_name: str = ""
    detail: str = ""
    price: int
    quantity: int = 0
    guarantee_period: int = 0
    supplier_id: Optional[str] = None
    category_id: Optional[str] = None
    images: List[str] = Field(default_factory=list, description="Image hrefs in storage order")


class ProductDetail(ProductSummary):
    supplier_name: Optional[str] = None
    category_name: Optional[str] = None


class PagedResult(BaseModel):
    products: List[ProductSummary] = Field(default_factory=list)
    page_number: int
    page_size: int
    total_pages: int
    total_products: int


class TopSellerEntry(BaseModel):
    product_id: str
    total_quantity_sold: int
    product_name: str
    images: List[ImageOut] = Field(default_factory=list)

# techstore/models/product.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any


def _to_int(raw: Any, default: int = 0) -> int:
    if raw in (None, ""):
        return default
    try:
        return int(float(raw))
    except (TypeError, ValueError):
        return default


def _to_bool(raw: Any) -> bool:
    # CSV cells come back as strings; normalize truthiness
    if isinstance(raw, str):
        return raw.strip().lower() in ("1", "true", "yes", "y", "t")
    if isinstance(raw, (int, float)):
        return bool(raw)
    return bool(raw)


def _to_str_or_none(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    s = str(raw)
    return s if s else None


@dataclass
class Image:
    id: str
    product_id: str
    href: str = ""

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Image":
        if d is None:
            raise ValueError("Cannot construct Image from None")
        return cls(
            id=str(d.get("id") or d.get("image_id") or ""),
            product_id=str(d.get("product_id") or ""),
            href=str(d.get("href") or d.get("image_href") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Category:
    id: str
    name: str = ""

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Category":
        return cls(id=str(d.get("id") or ""), name=str(d.get("name") or d.get("category_name") or ""))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Supplier:
    id: str
    name: str = ""

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Supplier":
        return cls(id=str(d.get("id") or ""), name=str(d.get("name") or d.get("supplier_name") or ""))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Product:
    """
    Catalog product. The CSV-backed store keeps everything as strings,
    so from_dict converts to proper types. Images live in their own table.
    """
    id: str
    name: str = ""
    serial_name: str = ""
    detail: str = ""
    price: int = 0
    quantity: int = 0
    guarantee_period: int = 0
    supplier_id: Optional[str] = None
    category_id: Optional[str] = None
    is_deleted: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Product":
        if d is None:
            raise ValueError("Cannot construct Product from None")
        return cls(
            id=str(d.get("id") or d.get("product_id") or ""),
            name=str(d.get("name") or ""),
            serial_name=str(d.get("serial_name") or ""),
            detail=str(d.get("detail") or ""),
            price=_to_int(d.get("price")),
            quantity=_to_int(d.get("quantity")),
            guarantee_period=_to_int(d.get("guarantee_period")),
            supplier_id=_to_str_or_none(d.get("supplier_id")),
            category_id=_to_str_or_none(d.get("category_id")),
            is_deleted=_to_bool(d.get("is_deleted", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["supplier_id"] = self.supplier_id or ""
        out["category_id"] = self.category_id or ""
        out["is_deleted"] = bool(self.is_deleted)
        return out

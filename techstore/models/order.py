# techstore/models/order.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class OrderLine:
    """
    One line of a placed order. Lines are never edited after the order is
    placed; the catalog only reads them to rank products by quantity sold.
    """
    id: str
    product_id: str
    quantity: int = 1
    order_id: Optional[str] = None
    unit_price: int = 0

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["order_id"] = self.order_id or ""
        return out

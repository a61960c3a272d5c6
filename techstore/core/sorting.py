from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union

import pandas as pd

from techstore.schemas.catalog import SortKey

# sort key -> product frame column
SORT_COLUMNS: Dict[SortKey, str] = {
    SortKey.NAME: "name",
    SortKey.PRICE: "price",
}

TIEBREAK_COLUMN = "id"


@dataclass(frozen=True)
class SortPolicy:
    """
    Ordering for a product listing. Direction only flips the primary key;
    equal keys always fall back to product id ascending so page boundaries
    stay put between calls. SortKey.NONE keeps storage order.
    """
    key: SortKey = SortKey.NONE
    descending: bool = False

    @property
    def column(self) -> Optional[str]:
        return SORT_COLUMNS.get(self.key)

    def apply(self, frame: pd.DataFrame) -> pd.DataFrame:
        column = self.column
        if column is None or frame.empty:
            return frame
        return frame.sort_values(
            by=[column, TIEBREAK_COLUMN],
            ascending=[not self.descending, True],
            kind="mergesort",
        )


def resolve_sort(key: Union[SortKey, str, None], descending: bool = False) -> SortPolicy:
    if not isinstance(key, SortKey):
        try:
            key = SortKey(str(key or "").strip().lower())
        except ValueError:
            key = SortKey.NONE
    return SortPolicy(key=key, descending=bool(descending))


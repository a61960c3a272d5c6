from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import ValidationError

from techstore.config import settings
from techstore.core.errors import CriteriaValidationError
from techstore.schemas.catalog import FilterCriteria


def _first_error(exc: ValidationError) -> CriteriaValidationError:
    err = exc.errors()[0]
    field = ".".join(str(p) for p in err.get("loc", ())) or None
    msg = err.get("msg", "invalid value")
    return CriteriaValidationError(f"{field}: {msg}" if field else msg, field=field)


def build_criteria(raw: Optional[Mapping[str, Any]] = None, **overrides: Any) -> FilterCriteria:
    """
    Normalize raw caller input into a FilterCriteria.

    Missing or blank optional fields mean "no constraint", a page number below 1
    becomes 1 and a page size below 1 becomes the configured default. Non-numeric
    or negative bounds and oversized pages raise CriteriaValidationError. A
    minimum price above the maximum is clamped down to the maximum.
    """
    data = dict(raw or {})
    data.update(overrides)
    try:
        return FilterCriteria.model_validate(data)
    except ValidationError as exc:
        raise _first_error(exc) from exc


def validate_top_seller_count(count: Any) -> int:
    if isinstance(count, bool):
        raise CriteriaValidationError("count must be an integer", field="count")
    try:
        value = int(count)
    except (TypeError, ValueError):
        raise CriteriaValidationError("count must be an integer", field="count") from None
    if isinstance(count, float) and value != count:
        raise CriteriaValidationError("count must be an integer", field="count")
    if value < 0:
        raise CriteriaValidationError("count must be zero or greater", field="count")
    if value > settings.MAX_TOP_SELLERS:
        raise CriteriaValidationError(f"count must be at most {settings.MAX_TOP_SELLERS}", field="count")
    return value

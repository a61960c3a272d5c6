"""
Listing filters as an ordered list of pure clauses.

Each clause maps a product frame (products joined with their category name)
to a boolean mask. A CompiledPredicate applies the clauses in order, each one
only seeing the rows the previous clauses kept, and stops once nothing is left.

Usage:
    predicate = compile_predicate(criteria)
    matched = predicate(products_frame)
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Callable, Tuple
import operator

import pandas as pd

from techstore.schemas.catalog import FilterCriteria

Mask = Callable[[pd.DataFrame], pd.Series]

# product columns the text search looks at, in order
SEARCH_COLUMNS = ("name", "serial_name", "detail", "category_name")


@dataclass(frozen=True)
class Clause:
    name: str
    mask: Mask

    def __call__(self, frame: pd.DataFrame) -> pd.Series:
        return self.mask(frame)


def not_deleted() -> Clause:
    return Clause("not_deleted", lambda f: ~f["is_deleted"].astype(bool))


def price_at_least(min_price: int) -> Clause:
    return Clause("min_price", lambda f: f["price"] >= min_price)


def price_at_most(max_price: int) -> Clause:
    return Clause("max_price", lambda f: f["price"] <= max_price)


def text_contains(search_key: str) -> Clause:
    key = search_key.lower()

    def _mask(f: pd.DataFrame) -> pd.Series:
        tests = [
            f[col].fillna("").astype(str).str.lower().str.contains(key, regex=False)
            for col in SEARCH_COLUMNS
        ]
        return reduce(operator.or_, tests)

    return Clause("search_key", _mask)


def supplier_is(supplier_id: str) -> Clause:
    return Clause("supplier_id", lambda f: f["supplier_id"] == supplier_id)


def category_is(category_id: str) -> Clause:
    return Clause("category_id", lambda f: f["category_id"] == category_id)


@dataclass(frozen=True)
class CompiledPredicate:
    clauses: Tuple[Clause, ...]

    def __call__(self, frame: pd.DataFrame) -> pd.DataFrame:
        for clause in self.clauses:
            if frame.empty:
                break
            frame = frame.loc[clause(frame)]
        return frame

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.clauses)


def compile_predicate(criteria: FilterCriteria) -> CompiledPredicate:
    clauses = [not_deleted(), price_at_least(criteria.min_price)]
    if criteria.max_price is not None:
        clauses.append(price_at_most(criteria.max_price))
    if criteria.search_key:
        clauses.append(text_contains(criteria.search_key))
    if criteria.supplier_id:
        clauses.append(supplier_is(criteria.supplier_id))
    if criteria.category_id:
        clauses.append(category_is(criteria.category_id))
    return CompiledPredicate(tuple(clauses))

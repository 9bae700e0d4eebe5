"""Filtering and ordering over the loaded snapshot.

Both operations return new lists and never touch the entries they are given,
so the same snapshot can be queried repeatedly for the lifetime of a page.
"""
from __future__ import annotations

import enum
import math
from typing import Iterable

from pydantic import BaseModel, Field

from ..schemas.listings import Listing


class SortKey(str, enum.Enum):
    PRICE_ASCENDING = "price-ascending"
    PRICE_DESCENDING = "price-descending"
    RECENT = "recent"

    @classmethod
    def parse(cls, value: str | None) -> "SortKey":
        """Map a raw form value to a key; anything unknown means most recent first."""

        try:
            return cls(value)
        except ValueError:
            return cls.RECENT


class ListingCriteria(BaseModel):
    contract_type: str = ""
    price_min: float | None = None
    price_max: float | None = None
    city: str = ""
    category: str = ""
    sort: SortKey = Field(default=SortKey.RECENT)

    @classmethod
    def from_query(
        cls,
        *,
        contract_type: str | None = None,
        price_min: str | None = None,
        price_max: str | None = None,
        city: str | None = None,
        category: str | None = None,
        sort: str | None = None,
    ) -> "ListingCriteria":
        """Build criteria from raw form values; unparseable bounds are dropped."""

        return cls(
            contract_type=(contract_type or "").strip(),
            price_min=parse_bound(price_min),
            price_max=parse_bound(price_max),
            city=city or "",
            category=category or "",
            sort=SortKey.parse(sort),
        )


def parse_bound(raw: str | None) -> float | None:
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def matches(entry: Listing, criteria: ListingCriteria) -> bool:
    if criteria.contract_type and entry.property_type != criteria.contract_type:
        return False
    price = entry.numeric_price
    if criteria.price_min is not None and price < criteria.price_min:
        return False
    if criteria.price_max is not None and price > criteria.price_max:
        return False
    if criteria.city and entry.city != criteria.city:
        return False
    if criteria.category and (entry.category or "") != criteria.category:
        return False
    return True


def filter_listings(entries: Iterable[Listing], criteria: ListingCriteria) -> list[Listing]:
    """Keep the entries satisfying every active criterion."""

    return [entry for entry in entries if matches(entry, criteria)]


def sort_listings(entries: Iterable[Listing], key: SortKey | str) -> list[Listing]:
    """Return a sorted copy; ties keep their input order for every key.

    The most-recent order compares ``insertion_date`` as plain text, which is
    only chronological for zero-padded ISO-8601 values.
    """

    items = list(entries)
    key = SortKey.parse(key)

    if key is SortKey.PRICE_ASCENDING:
        return sorted(items, key=lambda entry: entry.numeric_price)
    if key is SortKey.PRICE_DESCENDING:
        return sorted(items, key=lambda entry: entry.numeric_price, reverse=True)
    return sorted(items, key=lambda entry: entry.insertion_date or "", reverse=True)


def query_listings(entries: Iterable[Listing], criteria: ListingCriteria) -> list[Listing]:
    return sort_listings(filter_listings(entries, criteria), criteria.sort)

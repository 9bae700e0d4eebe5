"""Distinct facet values used to populate the filter controls."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..schemas.listings import FacetOptions, Listing


@dataclass(frozen=True, slots=True)
class Facets:
    cities: list[str]
    categories: list[str]


def derive_facets(entries: Iterable[Listing]) -> Facets:
    cities: set[str] = set()
    categories: set[str] = set()
    for entry in entries:
        if entry.city:
            cities.add(entry.city)
        if entry.category:
            categories.add(entry.category)
    return Facets(cities=sorted(cities), categories=sorted(categories))


def build_options(values: list[str], selected: str | None) -> FacetOptions:
    """Keep the previous selection only if it is still one of the options."""

    current = selected if selected and selected in values else ""
    return FacetOptions(options=list(values), selected=current)

"""Shared catalog fixtures."""
from __future__ import annotations

from typing import Any

import pytest

from listing_site.schemas.listings import Listing
from listing_site.services.store import normalise_listings


class StaticSource:
    """Catalog source returning a fixed payload and counting fetches."""

    def __init__(self, payload: Any) -> None:
        self.payload = payload
        self.calls = 0

    async def fetch(self) -> Any:
        self.calls += 1
        return self.payload


@pytest.fixture
def records() -> list[dict[str, Any]]:
    return [
        {
            "id": 1,
            "title": "Trilocale Navigli",
            "description": "Trilocale ristrutturato con balcone.",
            "price": 100000,
            "priceDisplay": "€ 100.000",
            "propertyType": "sale",
            "surfaceArea": 95,
            "roomCount": 3,
            "city": "Milano",
            "category": "Appartamento",
            "images": [
                {"source": "img/1a.jpg", "altText": "Soggiorno"},
                {"source": "img/1b.jpg", "altText": "Cucina"},
            ],
            "technicalDetails": {"piano": "3", "classeEnergetica": "C", "garage": ""},
            "insertionDate": "2024-05-12",
        },
        {
            "id": 2,
            "title": "Bilocale Termini",
            "price": 50000,
            "priceDisplay": "€ 50.000",
            "propertyType": "rent",
            "surfaceArea": 55,
            "roomCount": 2,
            "city": "Roma",
            "category": "Appartamento",
            "images": [],
            "insertionDate": "2024-06-03",
        },
        {
            "id": "3",
            "title": "Villa in collina",
            "price": "su richiesta",
            "priceDisplay": "Su richiesta",
            "propertyType": "sale",
            "surfaceArea": 240,
            "roomCount": 7,
            "city": "Torino",
            "category": "Villa",
            "images": [{"source": "img/3.jpg", "altText": ""}],
            "insertionDate": "2024-05-12",
        },
    ]


@pytest.fixture
def snapshot(records: list[dict[str, Any]]) -> tuple[Listing, ...]:
    return normalise_listings(records)


@pytest.fixture
def make_source():
    return StaticSource

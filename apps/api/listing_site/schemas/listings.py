"""Schemas for catalog entries and the presentation values derived from them."""
from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

RENT = "rent"


def _as_text(value: Any) -> Any:
    """Scalars published as numbers or booleans are shown as their text."""

    if isinstance(value, (bool, int, float)):
        return str(value)
    return value


class ListingImage(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    source: str = Field(default="")
    alt_text: str = Field(default="", alias="altText")

    @field_validator("source", "alt_text", mode="before")
    @classmethod
    def _text_or_empty(cls, value: Any) -> Any:
        return "" if value is None else _as_text(value)


class Listing(BaseModel):
    """One real-estate entry as published in the catalog resource."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int | str
    title: str = Field(default="")
    description: str | None = None
    price: Any = None
    price_display: str | None = Field(default=None, alias="priceDisplay")
    property_type: str | None = Field(default=None, alias="propertyType")
    surface_area: int | float | str | None = Field(default=None, alias="surfaceArea")
    room_count: int | float | str | None = Field(default=None, alias="roomCount")
    city: str | None = None
    category: str | None = None
    images: tuple[ListingImage, ...] = Field(default=())
    technical_details: dict[str, Any] = Field(default_factory=dict, alias="technicalDetails")
    insertion_date: str | None = Field(default=None, alias="insertionDate")

    @field_validator("title", mode="before")
    @classmethod
    def _title_text(cls, value: Any) -> Any:
        return "" if value is None else _as_text(value)

    @field_validator(
        "description", "price_display", "property_type", "city", "category", "insertion_date", mode="before"
    )
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        return _as_text(value)

    @field_validator("images", mode="before")
    @classmethod
    def _image_list(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            return ()
        return tuple(item for item in value if isinstance(item, (dict, ListingImage)))

    @field_validator("technical_details", mode="before")
    @classmethod
    def _details_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}

    @property
    def numeric_price(self) -> int | float:
        """Price used for filtering and sorting; anything non-numeric counts as 0."""

        value = self.price
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0
        if isinstance(value, float) and math.isnan(value):
            return 0
        return value

    @property
    def is_rent(self) -> bool:
        return self.property_type == RENT


class ListingCard(BaseModel):
    """Summary presentation of one entry."""

    id: str
    title: str
    image_src: str
    image_alt: str
    badge_class: str
    badge_label: str
    meta_line: str
    price_display: str
    href: str


class DetailRow(BaseModel):
    label: str
    value: str


class FacetOptions(BaseModel):
    options: list[str] = Field(default_factory=list)
    selected: str = ""


class ListingSearchResponse(BaseModel):
    count: int
    message: str
    results: list[ListingCard]
    cities: FacetOptions
    categories: FacetOptions


class ListingDetailResponse(BaseModel):
    listing: Listing
    meta_line: str
    details: list[DetailRow]
    title: str
    description: str
    structured_data: list[dict[str, Any]]

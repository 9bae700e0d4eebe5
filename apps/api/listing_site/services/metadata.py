"""SEO metadata and schema.org blocks for the page head."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from html import escape
from typing import Any

from ..core.config import Settings, settings as default_settings
from ..schemas.listings import Listing
from .detail import format_number

OFFER_MARKER = "jsonld-offer"
AGENCY_MARKER = "jsonld-real-estate-agent"
SCHEMA_CONTEXT = "https://schema.org"
IN_STOCK = "https://schema.org/InStock"


@dataclass
class PageHead:
    """The descriptive surface of one rendered page.

    Structured-data blocks are keyed by marker; setting a marker that is
    already present replaces that block where it stands.
    """

    title: str = ""
    description: str = ""
    meta_properties: dict[str, str] = field(default_factory=dict)
    _blocks: dict[str, dict[str, Any]] = field(default_factory=dict, init=False, repr=False)

    def set_block(self, marker: str, payload: dict[str, Any]) -> None:
        self._blocks[marker] = payload

    def has_block(self, marker: str) -> bool:
        return marker in self._blocks

    def block(self, marker: str) -> dict[str, Any] | None:
        return self._blocks.get(marker)

    @property
    def blocks(self) -> list[tuple[str, dict[str, Any]]]:
        return list(self._blocks.items())

    def render(self) -> str:
        parts = [f"<title>{escape(self.title)}</title>"]
        if self.description:
            parts.append(f'<meta name="description" content="{escape(self.description)}">')
        for prop, content in self.meta_properties.items():
            parts.append(f'<meta property="{escape(prop)}" content="{escape(content)}">')
        for marker, payload in self._blocks.items():
            parts.append(
                f'<script type="application/ld+json" id="{escape(marker)}">{dump_json_ld(payload)}</script>'
            )
        return "\n".join(parts)


def dump_json_ld(payload: dict[str, Any]) -> str:
    """Serialize a block so its text cannot terminate the surrounding script element."""

    text = json.dumps(payload, ensure_ascii=False)
    return text.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")


class MetadataInjector:
    """Keeps the page head in sync with the entry currently displayed."""

    def __init__(self, settings: Settings = default_settings) -> None:
        self._settings = settings

    def page_title(self, entry: Listing) -> str:
        return f"{entry.title} | Immobili | {self._settings.agency_name}"

    def page_description(self, entry: Listing) -> str:
        text = entry.description or (
            f"{entry.title}, {format_number(entry.surface_area)} m², "
            f"{format_number(entry.room_count)} locali, {entry.city or ''}. "
            f"{entry.price_display or ''}"
        )
        return text[: self._settings.description_max_length]

    def offer_block(self, entry: Listing, page_url: str) -> dict[str, Any]:
        return {
            "@context": SCHEMA_CONTEXT,
            "@type": "Offer",
            "name": entry.title or "",
            "description": entry.description or "",
            "url": page_url,
            "price": entry.numeric_price,
            "priceCurrency": self._settings.price_currency,
            "availability": IN_STOCK,
            "seller": {
                "@type": "Organization",
                "name": self._settings.agency_name,
            },
        }

    def agency_block(self, base_url: str) -> dict[str, Any]:
        base = self.site_base(base_url)
        return {
            "@context": SCHEMA_CONTEXT,
            "@type": "RealEstateAgent",
            "@id": f"{base}#agency",
            "name": self._settings.agency_name,
            "description": self._settings.agency_description,
            "url": base,
            "telephone": self._settings.agency_telephone,
            "address": {
                "@type": "PostalAddress",
                "streetAddress": self._settings.agency_street_address,
                "addressLocality": self._settings.agency_locality,
                "postalCode": self._settings.agency_postal_code,
                "addressCountry": self._settings.agency_country,
            },
            "areaServed": {"@type": "Country", "name": self._settings.agency_area_served},
        }

    def site_base(self, base_url: str) -> str:
        base = self._settings.site_base_url or base_url
        if not base.startswith("http"):
            base = self._settings.fallback_base_url
        return base if base.endswith("/") else f"{base}/"

    def apply_metadata(self, head: PageHead, entry: Listing, page_url: str) -> None:
        title = self.page_title(entry)
        description = self.page_description(entry)
        head.title = title
        head.description = description
        head.meta_properties["og:title"] = title
        head.meta_properties["og:description"] = description
        head.set_block(OFFER_MARKER, self.offer_block(entry, page_url))

    def inject_agency(self, head: PageHead, base_url: str) -> None:
        if head.has_block(AGENCY_MARKER):
            return
        head.set_block(AGENCY_MARKER, self.agency_block(base_url))

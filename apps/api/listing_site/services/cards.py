"""Summary cards for the listing grids."""
from __future__ import annotations

from html import escape
from urllib.parse import quote

from ..core.config import Settings, settings as default_settings
from ..schemas.listings import Listing, ListingCard
from .detail import canonical_id, format_number

CARD_CLASS = "card-immobile"
BADGE_RENT_CLASS = "badge badge--affitto"
BADGE_SALE_CLASS = "badge badge--vendita"
DETAIL_PATH = "immobile"


def primary_image(entry: Listing, settings: Settings = default_settings) -> tuple[str, str]:
    """Source and alt text of the first image, or the placeholder when there is none."""

    if entry.images and entry.images[0].source:
        first = entry.images[0]
        return first.source, first.alt_text or entry.title
    return settings.placeholder_image, entry.title or settings.placeholder_alt


def badge_for(entry: Listing) -> tuple[str, str]:
    if entry.is_rent:
        return BADGE_RENT_CLASS, "Affitto"
    return BADGE_SALE_CLASS, "Vendita"


def card_meta_line(entry: Listing) -> str:
    return (
        f"{format_number(entry.surface_area)} m² · "
        f"{format_number(entry.room_count)} locali · "
        f"{entry.city or ''}"
    )


def detail_href(identifier: object) -> str:
    return f"{DETAIL_PATH}?id={quote(canonical_id(identifier), safe='')}"


def compose_card(entry: Listing, settings: Settings = default_settings) -> ListingCard:
    image_src, image_alt = primary_image(entry, settings)
    badge_class, badge_label = badge_for(entry)
    return ListingCard(
        id=canonical_id(entry.id),
        title=entry.title,
        image_src=image_src,
        image_alt=image_alt,
        badge_class=badge_class,
        badge_label=badge_label,
        meta_line=card_meta_line(entry),
        price_display=entry.price_display or "",
        href=detail_href(entry.id),
    )


def render_card_html(card: ListingCard, heading: str = "h2") -> str:
    """Markup for one card; every interpolated value is escaped."""

    return (
        f'<article class="{CARD_CLASS}">'
        f'<div class="{CARD_CLASS}__media">'
        f'<img src="{escape(card.image_src)}" width="400" height="300" alt="{escape(card.image_alt)}"'
        ' loading="lazy" decoding="async">'
        f'<div class="{CARD_CLASS}__badge-wrap">'
        f'<span class="{escape(card.badge_class)}">{escape(card.badge_label)}</span>'
        "</div>"
        "</div>"
        f'<div class="{CARD_CLASS}__body">'
        f'<{heading} class="{CARD_CLASS}__title">{escape(card.title)}</{heading}>'
        f'<div class="{CARD_CLASS}__meta">{escape(card.meta_line)}</div>'
        f'<p class="{CARD_CLASS}__price">{escape(card.price_display)}</p>'
        f'<a href="{escape(card.href)}" class="btn btn--primary btn--sm">Dettagli</a>'
        "</div>"
        "</article>"
    )

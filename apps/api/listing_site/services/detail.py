"""Single-entry lookup and the detail rows shown on the entry page."""
from __future__ import annotations

from typing import Any, Sequence

from ..schemas.listings import DetailRow, Listing

TECHNICAL_LABELS: dict[str, str] = {
    "piano": "Piano",
    "riscaldamento": "Riscaldamento",
    "classeEnergetica": "Classe energetica",
    "annoCostruzione": "Anno costruzione",
    "stato": "Stato",
    "giardino": "Giardino",
    "postiAuto": "Posti auto",
    "terrazzo": "Terrazzo",
    "garage": "Garage",
}


def canonical_id(value: Any) -> str:
    """Render an identifier the same way whether it arrived as a number or as text.

    Integers, and floats with no fractional part, become plain digits; strings
    are kept as they are. ``7``, ``7.0`` and ``"7"`` all map to ``"7"``.
    """

    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def resolve_listing(entries: Sequence[Listing], identifier: Any) -> Listing | None:
    """Return the entry whose id matches ``identifier``, or ``None``."""

    if identifier is None or identifier == "" or not entries:
        return None

    wanted = canonical_id(identifier)
    for entry in entries:
        if canonical_id(entry.id) == wanted:
            return entry
    return None


def format_number(value: int | float | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def header_meta_line(entry: Listing) -> str:
    """City, surface and rooms joined for the detail header, skipping what is missing."""

    parts: list[str] = []
    if entry.city:
        parts.append(entry.city)
    if entry.surface_area is not None:
        parts.append(f"{format_number(entry.surface_area)} m²")
    if entry.room_count is not None:
        parts.append(f"{format_number(entry.room_count)} locali")
    return " · ".join(parts)


def detail_rows(entry: Listing) -> list[DetailRow]:
    rows: list[DetailRow] = []
    if entry.surface_area is not None:
        rows.append(DetailRow(label="Superficie", value=f"{format_number(entry.surface_area)} m²"))
    if entry.room_count is not None:
        rows.append(DetailRow(label="Locali", value=format_number(entry.room_count)))
    if entry.city:
        rows.append(DetailRow(label="Località", value=entry.city))
    if entry.category:
        rows.append(DetailRow(label="Tipologia", value=entry.category))

    for key, value in entry.technical_details.items():
        if not value:
            continue
        rows.append(DetailRow(label=TECHNICAL_LABELS.get(key, key), value=_display_value(value)))
    return rows


def _display_value(value: Any) -> str:
    if value is True:
        return "Sì"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)

"""Populated-grid versus empty-state decision for a derived view."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..schemas.listings import ListingCard

EMPTY_MESSAGE = "Nessun immobile trovato. Prova a modificare i filtri."


def count_message(count: int) -> str:
    if count == 0:
        return EMPTY_MESSAGE
    if count == 1:
        return "1 immobile trovato"
    return f"{count} immobili trovati"


@dataclass(frozen=True, slots=True)
class ResultView:
    cards: tuple[ListingCard, ...]
    message: str

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return not self.cards


def present_results(cards: Sequence[ListingCard]) -> ResultView:
    return ResultView(cards=tuple(cards), message=count_message(len(cards)))

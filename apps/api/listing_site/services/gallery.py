"""Image gallery state for the detail page."""
from __future__ import annotations

from dataclasses import dataclass

from ..core.config import Settings, settings as default_settings
from ..schemas.listings import Listing, ListingImage
from .cards import primary_image


@dataclass(frozen=True, slots=True)
class Thumbnail:
    index: int
    source: str
    alt_text: str
    active: bool


class GalleryController:
    """Track which of an entry's images is shown as the main one."""

    def __init__(self, entry: Listing, settings: Settings = default_settings) -> None:
        self._entry = entry
        self._settings = settings
        self._active_index = 0

    @property
    def images(self) -> tuple[ListingImage, ...]:
        return self._entry.images

    @property
    def active_index(self) -> int:
        return self._active_index

    def select_image(self, index: int) -> bool:
        """Show the image at ``index``; out-of-range indices are ignored.

        Returns ``True`` when the selection was applied.
        """

        if not 0 <= index < len(self.images):
            return False
        self._active_index = index
        return True

    @property
    def active_image(self) -> ListingImage:
        if not self.images:
            source, alt_text = primary_image(self._entry, self._settings)
            return ListingImage(source=source, alt_text=alt_text)
        return self.images[self._active_index]

    @property
    def thumbnails(self) -> list[Thumbnail]:
        if len(self.images) < 2:
            return []
        return [
            Thumbnail(
                index=position,
                source=image.source,
                alt_text=image.alt_text,
                active=position == self._active_index,
            )
            for position, image in enumerate(self.images)
        ]

"""Catalog loading: fetch the listing resource once per page instance."""
from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Protocol

import httpx
from fastapi import Depends
from pydantic import ValidationError

from ..core.config import Settings, get_settings
from ..schemas.listings import Listing
from .detail import canonical_id

logger = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parent.parent

Snapshot = tuple[Listing, ...]


class ListingUnavailableError(Exception):
    """Raised by a source when the catalog resource cannot be read."""


class ListingSource(Protocol):
    async def fetch(self) -> Any:
        """Return the decoded catalog payload or raise ListingUnavailableError."""


class HttpListingSource:
    """Read the catalog over HTTP relative to a base URL."""

    def __init__(
        self,
        base_url: str,
        path: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._path = path
        self._timeout = timeout
        self._transport = transport

    async def fetch(self) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(self._path)
        except httpx.HTTPError as exc:
            raise ListingUnavailableError(f"Request for {self._path} failed: {exc}") from exc

        if not response.is_success:
            raise ListingUnavailableError(f"Unexpected status {response.status_code} for {self._path}")

        try:
            return response.json()
        except ValueError as exc:
            raise ListingUnavailableError(f"Malformed JSON in {self._path}") from exc


class FileListingSource:
    """Read the catalog from a directory on disk."""

    def __init__(self, root: Path, path: str) -> None:
        self._file = root / path

    async def fetch(self) -> Any:
        try:
            text = await asyncio.to_thread(self._file.read_text, encoding="utf-8")
        except OSError as exc:
            raise ListingUnavailableError(f"Cannot read {self._file}: {exc}") from exc

        try:
            return json.loads(text)
        except ValueError as exc:
            raise ListingUnavailableError(f"Malformed JSON in {self._file}") from exc


def build_listing_source(settings: Settings) -> ListingSource:
    """Pick the HTTP source when a base URL is configured, the packaged file otherwise."""

    if settings.listings_base_url:
        return HttpListingSource(
            settings.listings_base_url,
            settings.listings_path,
            timeout=settings.listings_timeout_seconds,
        )
    return FileListingSource(PACKAGE_ROOT, settings.listings_path)


def normalise_listings(payload: Any) -> Snapshot:
    """Validate raw records into entries, dropping malformed ones and repeated ids."""

    if not isinstance(payload, list):
        logger.warning("Catalog payload is %s, expected a list", type(payload).__name__)
        return ()

    entries: list[Listing] = []
    seen: set[str] = set()
    for position, record in enumerate(payload):
        if not isinstance(record, dict):
            logger.warning("Skipping catalog record %d: not an object", position)
            continue
        try:
            entry = Listing.model_validate(record)
        except ValidationError as exc:
            logger.warning("Skipping catalog record %d: %s", position, exc.errors()[0]["msg"])
            continue

        key = canonical_id(entry.id)
        if key in seen:
            logger.warning("Skipping catalog record %d: duplicate id %s", position, key)
            continue
        seen.add(key)
        entries.append(entry)
    return tuple(entries)


class ListingStore:
    """Page-scoped holder of the loaded snapshot.

    The first ``load`` fetches from the source; every later call returns the
    cached tuple. A failed load is cached as an empty snapshot too, so callers
    cannot tell "empty" and "failed" apart.
    """

    def __init__(self, source: ListingSource) -> None:
        self._source = source
        self._snapshot: Snapshot | None = None
        self._lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    async def load(self) -> Snapshot:
        if self._snapshot is not None:
            return self._snapshot

        async with self._lock:
            if self._snapshot is None:
                self._snapshot = await self._load_once()
        return self._snapshot

    async def _load_once(self) -> Snapshot:
        try:
            payload = await self._source.fetch()
        except ListingUnavailableError as exc:
            logger.warning("Catalog unavailable, using empty snapshot: %s", exc)
            return ()

        snapshot = normalise_listings(payload)
        logger.info("Loaded %d catalog entries", len(snapshot))
        return snapshot


def get_listing_source() -> ListingSource:
    """FastAPI dependency resolving the configured catalog source."""

    return build_listing_source(get_settings())


def get_listing_store(source: ListingSource = Depends(get_listing_source)) -> ListingStore:
    """FastAPI dependency providing one store per request."""

    return ListingStore(source)

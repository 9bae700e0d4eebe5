"""HTML pages: home, filtered listing and entry detail."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import HTMLResponse

from .. import pages
from ..core.config import settings
from ..services import detail as detail_service
from ..services.cards import compose_card
from ..services.facets import build_options, derive_facets
from ..services.gallery import GalleryController
from ..services.metadata import MetadataInjector, PageHead
from ..services.query import ListingCriteria, query_listings
from ..services.results import present_results
from ..services.store import ListingStore, get_listing_store

logger = logging.getLogger(__name__)

router = APIRouter()


def _base_head(request: Request, title: str, description: str = "") -> PageHead:
    head = PageHead(title=title, description=description)
    MetadataInjector(settings).inject_agency(head, str(request.base_url))
    return head


@router.get("/", response_class=HTMLResponse, tags=["pages"])
async def home(request: Request, store: ListingStore = Depends(get_listing_store)) -> HTMLResponse:
    """Render the first few catalog entries."""

    snapshot = await store.load()
    featured = snapshot[: settings.home_card_limit]
    view = present_results([compose_card(entry, settings) for entry in featured])
    head = _base_head(request, f"Home | {settings.agency_name}", settings.agency_description)
    return HTMLResponse(content=pages.render_home_page(head, view))


@router.get("/immobili", response_class=HTMLResponse, tags=["pages"])
async def listing_page(
    request: Request,
    contract_type: str | None = Query(None, alias="contratto"),
    price_min: str | None = Query(None, alias="prezzo-min"),
    price_max: str | None = Query(None, alias="prezzo-max"),
    city: str | None = Query(None, alias="localita"),
    category: str | None = Query(None, alias="tipo-immobile"),
    sort: str | None = Query(None, alias="ordine"),
    store: ListingStore = Depends(get_listing_store),
) -> HTMLResponse:
    """Render the filter form and the entries matching it."""

    criteria = ListingCriteria.from_query(
        contract_type=contract_type,
        price_min=price_min,
        price_max=price_max,
        city=city,
        category=category,
        sort=sort,
    )
    snapshot = await store.load()
    facets = derive_facets(snapshot)
    view = present_results([compose_card(entry, settings) for entry in query_listings(snapshot, criteria)])

    head = _base_head(request, f"Immobili | {settings.agency_name}", settings.agency_description)
    html = pages.render_listing_page(
        head,
        criteria,
        build_options(facets.cities, criteria.city),
        build_options(facets.categories, criteria.category),
        view,
    )
    return HTMLResponse(content=html)


@router.get("/immobile", response_class=HTMLResponse, tags=["pages"])
async def detail_page(
    request: Request,
    listing_id: str | None = Query(None, alias="id"),
    image: str | None = Query(None, alias="img"),
    store: ListingStore = Depends(get_listing_store),
) -> HTMLResponse:
    """Render one entry, or the not-found state when it cannot be resolved."""

    not_found_head = _base_head(request, f"Immobile non trovato | {settings.agency_name}")
    if not listing_id:
        return HTMLResponse(
            content=pages.render_not_found_page(not_found_head),
            status_code=status.HTTP_404_NOT_FOUND,
        )

    snapshot = await store.load()
    entry = detail_service.resolve_listing(snapshot, listing_id)
    if entry is None:
        logger.info("Listing %s not found among %d entries", listing_id, len(snapshot))
        return HTMLResponse(
            content=pages.render_not_found_page(not_found_head),
            status_code=status.HTTP_404_NOT_FOUND,
        )

    head = _base_head(request, "")
    MetadataInjector(settings).apply_metadata(head, entry, str(request.url))

    gallery = GalleryController(entry, settings)
    if image is not None:
        try:
            gallery.select_image(int(image))
        except ValueError:
            logger.debug("Ignoring image index %r", image)

    html = pages.render_detail_page(
        head,
        entry,
        compose_card(entry, settings),
        detail_service.header_meta_line(entry),
        detail_service.detail_rows(entry),
        gallery,
    )
    return HTMLResponse(content=html)

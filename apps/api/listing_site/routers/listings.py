"""JSON endpoints over the same snapshot the pages use."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from ..core.config import settings
from ..schemas import listings as listings_schema
from ..services import detail as detail_service
from ..services.cards import compose_card
from ..services.facets import build_options, derive_facets
from ..services.metadata import MetadataInjector, PageHead
from ..services.query import ListingCriteria, query_listings
from ..services.results import present_results
from ..services.store import ListingStore, get_listing_store

router = APIRouter()


@router.get("/listings", response_model=listings_schema.ListingSearchResponse)
async def search_listings(
    contract_type: str | None = Query(None, alias="contratto"),
    price_min: str | None = Query(None, alias="prezzo-min"),
    price_max: str | None = Query(None, alias="prezzo-max"),
    city: str | None = Query(None, alias="localita"),
    category: str | None = Query(None, alias="tipo-immobile"),
    sort: str | None = Query(None, alias="ordine"),
    store: ListingStore = Depends(get_listing_store),
) -> listings_schema.ListingSearchResponse:
    """Return cards for the entries matching the filters, plus refreshed facets."""

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

    return listings_schema.ListingSearchResponse(
        count=view.count,
        message=view.message,
        results=list(view.cards),
        cities=build_options(facets.cities, criteria.city),
        categories=build_options(facets.categories, criteria.category),
    )


@router.get("/listings/{listing_id}", response_model=listings_schema.ListingDetailResponse)
async def get_listing(
    listing_id: str,
    request: Request,
    store: ListingStore = Depends(get_listing_store),
) -> listings_schema.ListingDetailResponse:
    """Return one entry with its detail rows and structured data."""

    snapshot = await store.load()
    entry = detail_service.resolve_listing(snapshot, listing_id)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")

    injector = MetadataInjector(settings)
    head = PageHead()
    injector.inject_agency(head, str(request.base_url))
    injector.apply_metadata(head, entry, str(request.url))

    return listings_schema.ListingDetailResponse(
        listing=entry,
        meta_line=detail_service.header_meta_line(entry),
        details=detail_service.detail_rows(entry),
        title=head.title,
        description=head.description,
        structured_data=[payload for _, payload in head.blocks],
    )

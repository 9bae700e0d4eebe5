"""End-to-end tests for the HTML pages and the JSON API."""
from __future__ import annotations

from collections.abc import Iterator

import pytest
from httpx import ASGITransport, AsyncClient

from listing_site.main import app
from listing_site.services.store import get_listing_source


@pytest.fixture
def catalog(records, make_source) -> Iterator:
    source = make_source(records)
    app.dependency_overrides[get_listing_source] = lambda: source
    yield source
    app.dependency_overrides.clear()


@pytest.fixture
def empty_catalog(make_source) -> Iterator:
    source = make_source("not a list")
    app.dependency_overrides[get_listing_source] = lambda: source
    yield source
    app.dependency_overrides.clear()


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


@pytest.mark.asyncio
async def test_listing_page_filters_by_contract(catalog):
    async with _client() as client:
        response = await client.get("/immobili", params={"contratto": "rent"})

    assert response.status_code == 200
    assert response.text.count('<article class="card-immobile">') == 1
    assert "Bilocale Termini" in response.text
    assert "1 immobile trovato" in response.text
    assert catalog.calls == 1


@pytest.mark.asyncio
async def test_listing_page_ignores_bad_bounds_and_keeps_selection(catalog):
    async with _client() as client:
        response = await client.get(
            "/immobili",
            params={"prezzo-min": "abc", "localita": "Roma", "ordine": "price-ascending"},
        )

    assert response.status_code == 200
    assert '<option value="Roma" selected>Roma</option>' in response.text
    assert "1 immobile trovato" in response.text


@pytest.mark.asyncio
async def test_empty_catalog_shows_empty_state(empty_catalog):
    async with _client() as client:
        response = await client.get("/immobili")

    assert response.status_code == 200
    assert 'id="immobili-fallback"' in response.text
    assert "Nessun immobile trovato" in response.text
    assert "card-immobile" not in response.text


@pytest.mark.asyncio
async def test_home_page_lists_featured_entries(catalog):
    async with _client() as client:
        response = await client.get("/")

    assert response.status_code == 200
    assert response.text.count('<article class="card-immobile">') == 3
    assert 'id="jsonld-real-estate-agent"' in response.text


@pytest.mark.asyncio
async def test_detail_page_renders_entry_and_metadata(catalog):
    async with _client() as client:
        response = await client.get("/immobile", params={"id": "1", "img": "1"})

    assert response.status_code == 200
    text = response.text
    assert "<title>Trilocale Navigli | Immobili | " in text
    assert text.count('id="jsonld-offer"') == 1
    assert text.count('id="jsonld-real-estate-agent"') == 1
    assert 'id="immobile-gallery-main" src="img/1b.jpg"' in text
    assert "Classe energetica" in text


@pytest.mark.asyncio
async def test_detail_page_ignores_out_of_range_image(catalog):
    async with _client() as client:
        response = await client.get("/immobile", params={"id": "1", "img": "9"})

    assert 'id="immobile-gallery-main" src="img/1a.jpg"' in response.text


@pytest.mark.asyncio
@pytest.mark.parametrize("image", ["²", "abc", "1.5", ""])
async def test_detail_page_ignores_non_integer_image(catalog, image):
    async with _client() as client:
        response = await client.get("/immobile", params={"id": "1", "img": image})

    assert response.status_code == 200
    assert 'id="immobile-gallery-main" src="img/1a.jpg"' in response.text


@pytest.mark.asyncio
async def test_detail_page_unknown_id_is_not_found(catalog):
    async with _client() as client:
        response = await client.get("/immobile", params={"id": "99"})

    assert response.status_code == 404
    assert 'id="immobile-not-found"' in response.text
    assert "jsonld-offer" not in response.text


@pytest.mark.asyncio
async def test_detail_page_without_id_skips_loading(catalog):
    async with _client() as client:
        response = await client.get("/immobile")

    assert response.status_code == 404
    assert 'id="immobile-not-found"' in response.text
    assert catalog.calls == 0


@pytest.mark.asyncio
async def test_api_search_returns_cards_and_facets(catalog):
    async with _client() as client:
        response = await client.get("/api/listings", params={"ordine": "price-ascending", "localita": "Napoli"})

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 0
    assert body["message"].startswith("Nessun immobile trovato")
    assert body["cities"] == {"options": ["Milano", "Roma", "Torino"], "selected": ""}

    async with _client() as client:
        response = await client.get("/api/listings", params={"ordine": "price-ascending"})

    assert [card["id"] for card in response.json()["results"]] == ["3", "2", "1"]


@pytest.mark.asyncio
async def test_api_detail_and_not_found(catalog):
    async with _client() as client:
        found = await client.get("/api/listings/3")
        missing = await client.get("/api/listings/99")

    assert found.status_code == 200
    body = found.json()
    assert body["listing"]["title"] == "Villa in collina"
    assert body["listing"]["priceDisplay"] == "Su richiesta"
    assert [block["@type"] for block in body["structured_data"]] == ["RealEstateAgent", "Offer"]
    assert missing.status_code == 404

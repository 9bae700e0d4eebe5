from listing_site.pages import render_results
from listing_site.services.cards import compose_card
from listing_site.services.results import EMPTY_MESSAGE, count_message, present_results


def test_count_messages():
    assert count_message(0) == EMPTY_MESSAGE
    assert count_message(1) == "1 immobile trovato"
    assert count_message(4) == "4 immobili trovati"


def test_empty_view_shows_fallback():
    view = present_results([])

    html = render_results(view, grid_id="immobili-grid", fallback_id="immobili-fallback")

    assert view.is_empty
    assert view.message.startswith("Nessun immobile trovato")
    assert 'class="immobili-fallback"' in html
    assert 'aria-live="polite"' in html
    assert "card-immobile" not in html


def test_populated_view_renders_cards(snapshot):
    view = present_results([compose_card(entry) for entry in snapshot])

    html = render_results(view, grid_id="immobili-grid", fallback_id="immobili-fallback")

    assert view.count == 3
    assert html.count('<article class="card-immobile">') == 3
    assert "3 immobili trovati" in html
    assert "immobili-fallback" not in html

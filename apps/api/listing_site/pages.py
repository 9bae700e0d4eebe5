"""Server-rendered HTML for the home, listing and detail pages."""
from __future__ import annotations

from html import escape
from typing import Sequence

from .schemas.listings import DetailRow, FacetOptions, Listing, ListingCard
from .services.cards import render_card_html
from .services.gallery import GalleryController
from .services.metadata import PageHead
from .services.query import ListingCriteria, SortKey
from .services.results import ResultView

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="it">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
{head}
</head>
<body>
    <main class="layout-main">
{body}
    </main>
{scripts}
</body>
</html>
"""

CONTRACT_OPTIONS: tuple[tuple[str, str], ...] = (
    ("", "Vendita e affitto"),
    ("sale", "Vendita"),
    ("rent", "Affitto"),
)

SORT_OPTIONS: tuple[tuple[SortKey, str], ...] = (
    (SortKey.RECENT, "Più recenti"),
    (SortKey.PRICE_ASCENDING, "Prezzo crescente"),
    (SortKey.PRICE_DESCENDING, "Prezzo decrescente"),
)

GALLERY_SCRIPT = """<script>
document.querySelectorAll('.immobile-gallery__thumb').forEach(function (btn) {
    btn.addEventListener('click', function (event) {
        var main = document.getElementById('immobile-gallery-main');
        if (!main) return;
        event.preventDefault();
        main.src = btn.dataset.src;
        main.alt = btn.dataset.alt || '';
    });
});
</script>"""

NOT_FOUND_BODY = """        <section id="immobile-not-found" class="immobile-fallback">
            <h1>Immobile non trovato</h1>
            <p>L'immobile richiesto non è disponibile. <a href="immobili">Torna all'elenco</a>.</p>
        </section>"""


def render_page(head: PageHead, body: str, scripts: str = "") -> str:
    return PAGE_TEMPLATE.format(head=head.render(), body=body, scripts=scripts)


def _option(value: str, label: str, selected: str) -> str:
    marker = " selected" if value == selected else ""
    return f'<option value="{escape(value)}"{marker}>{escape(label)}</option>'


def _select(name: str, label: str, options: Sequence[tuple[str, str]], selected: str) -> str:
    rendered = "".join(_option(value, text, selected) for value, text in options)
    return (
        f'<label for="{name}">{escape(label)}</label>'
        f'<select id="{name}" name="{name}">{rendered}</select>'
    )


def _facet_select(name: str, label: str, empty_label: str, facet: FacetOptions) -> str:
    options = [("", empty_label)] + [(value, value) for value in facet.options]
    return _select(name, label, options, facet.selected)


def _bound_value(value: float | None) -> str:
    if value is None:
        return ""
    return str(int(value)) if value.is_integer() else str(value)


def render_filter_form(criteria: ListingCriteria, cities: FacetOptions, categories: FacetOptions) -> str:
    return (
        '<form id="filtri-immobili-form" class="filtri" method="get" action="immobili">'
        + _select("contratto", "Contratto", CONTRACT_OPTIONS, criteria.contract_type)
        + '<label for="prezzo-min">Prezzo minimo</label>'
        f'<input id="prezzo-min" name="prezzo-min" inputmode="numeric" value="{escape(_bound_value(criteria.price_min))}">'
        '<label for="prezzo-max">Prezzo massimo</label>'
        f'<input id="prezzo-max" name="prezzo-max" inputmode="numeric" value="{escape(_bound_value(criteria.price_max))}">'
        + _facet_select("localita", "Località", "Tutte le località", cities)
        + _facet_select("tipo-immobile", "Tipologia", "Tutte le tipologie", categories)
        + _select("ordine", "Ordina per", [(key.value, text) for key, text in SORT_OPTIONS], criteria.sort.value)
        + '<button type="submit" class="btn btn--primary">Filtra</button>'
        "</form>"
    )


def render_results(view: ResultView, *, grid_id: str, fallback_id: str, heading: str = "h2") -> str:
    """Grid or empty-state fallback plus the live count region."""

    status = (
        '<p id="immobili-result-count" class="immobili-result-count" role="status" aria-live="polite">'
        f"{escape(view.message)}</p>"
    )
    if view.is_empty:
        return (
            status
            + f'<div id="{grid_id}" class="grid-immobili" hidden></div>'
            + f'<div id="{fallback_id}" class="immobili-fallback">'
            "<p>Nessun immobile disponibile al momento.</p></div>"
        )
    cards = "".join(render_card_html(card, heading) for card in view.cards)
    return status + f'<div id="{grid_id}" class="grid-immobili">{cards}</div>'


def render_listing_page(
    head: PageHead,
    criteria: ListingCriteria,
    cities: FacetOptions,
    categories: FacetOptions,
    view: ResultView,
) -> str:
    body = (
        "<h1>Immobili</h1>"
        + render_filter_form(criteria, cities, categories)
        + render_results(view, grid_id="immobili-grid", fallback_id="immobili-fallback")
    )
    return render_page(head, body)


def render_home_page(head: PageHead, view: ResultView) -> str:
    body = (
        "<h1>Immobili in evidenza</h1>"
        + render_results(view, grid_id="home-immobili-grid", fallback_id="home-immobili-fallback", heading="h3")
        + '<p><a href="immobili" class="btn btn--accent">Sfoglia immobili</a></p>'
    )
    return render_page(head, body)


def render_gallery(gallery: GalleryController, entry: Listing, href: str) -> str:
    main = gallery.active_image
    html = (
        '<figure class="immobile-gallery" role="group" aria-label="Galleria immagini">'
        f'<img id="immobile-gallery-main" src="{escape(main.source)}" width="720" height="540"'
        f' alt="{escape(main.alt_text or entry.title)}" loading="eager">'
    )
    thumbs = gallery.thumbnails
    if thumbs:
        html += '<figcaption class="immobile-gallery__thumbs">'
        for thumb in thumbs:
            current = ' aria-current="true"' if thumb.active else ""
            html += (
                f'<a class="immobile-gallery__thumb" href="{escape(href)}&amp;img={thumb.index}"'
                f' data-index="{thumb.index}" data-src="{escape(thumb.source)}" data-alt="{escape(thumb.alt_text)}"'
                f' aria-label="Vedi immagine {thumb.index + 1}"{current}>'
                f'<img src="{escape(thumb.source)}" width="80" height="60" alt="" loading="lazy" decoding="async">'
                "</a>"
            )
        html += "</figcaption>"
    return html + "</figure>"


def render_detail_page(
    head: PageHead,
    entry: Listing,
    card: ListingCard,
    meta_line: str,
    rows: Sequence[DetailRow],
    gallery: GalleryController,
) -> str:
    title = escape(entry.title)
    body = (
        '<article id="immobile-detail">'
        '<nav id="immobile-breadcrumb" aria-label="Percorso"><ol>'
        '<li><a href="./">Home</a></li><li aria-hidden="true">/</li>'
        '<li><a href="immobili">Immobili</a></li><li aria-hidden="true">/</li>'
        f'<li aria-current="page">{title}</li></ol></nav>'
        '<header id="immobile-header">'
        f'<span class="{escape(card.badge_class)}">{escape(card.badge_label)}</span>'
        f'<h1 id="immobile-title">{title}</h1>'
        f'<p class="immobile-meta">{escape(meta_line)}</p>'
        f'<p class="immobile-price">{escape(card.price_display)}</p>'
        "</header>"
        f'<div id="immobile-gallery">{render_gallery(gallery, entry, card.href)}</div>'
    )
    if entry.description:
        body += (
            '<section id="immobile-descrizione"><h2 id="descrizione">Descrizione</h2>'
            f"<p>{escape(entry.description)}</p></section>"
        )
    if rows:
        items = "".join(
            f"<li><strong>{escape(row.label)}:</strong> {escape(row.value)}</li>" for row in rows
        )
        body += f'<section id="immobile-dettagli"><h2 id="caratteristiche">Caratteristiche</h2><ul>{items}</ul></section>'
    body += (
        '<section id="immobile-cta"><h2 id="contatto-immobile">Richiedi informazioni</h2>'
        "<p>Per visite o dettagli contatta la nostra agenzia.</p>"
        '<a href="contatti" class="btn btn--primary btn--lg">Contattaci</a></section>'
        "</article>"
    )
    scripts = GALLERY_SCRIPT if gallery.thumbnails else ""
    return render_page(head, body, scripts)


def render_not_found_page(head: PageHead) -> str:
    return render_page(head, NOT_FOUND_BODY)

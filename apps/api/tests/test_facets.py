from listing_site.schemas.listings import Listing
from listing_site.services.facets import build_options, derive_facets


def test_facets_are_distinct_and_sorted(snapshot):
    extra = Listing.model_validate({"id": 9, "city": "Bari", "category": ""})

    facets = derive_facets((*snapshot, extra, snapshot[0]))

    assert facets.cities == ["Bari", "Milano", "Roma", "Torino"]
    assert facets.categories == ["Appartamento", "Villa"]


def test_facets_of_empty_snapshot():
    facets = derive_facets(())

    assert facets.cities == []
    assert facets.categories == []


def test_previous_selection_is_kept_when_still_offered():
    options = build_options(["Milano", "Roma"], "Roma")

    assert options.selected == "Roma"
    assert options.options == ["Milano", "Roma"]


def test_stale_selection_resets():
    assert build_options(["Milano"], "Napoli").selected == ""
    assert build_options(["Milano"], None).selected == ""

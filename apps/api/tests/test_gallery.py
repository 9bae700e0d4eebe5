from listing_site.core.config import Settings
from listing_site.services.gallery import GalleryController


def test_defaults_to_first_image(snapshot):
    gallery = GalleryController(snapshot[0])

    assert gallery.active_index == 0
    assert gallery.active_image.source == "img/1a.jpg"


def test_select_image_swaps_active(snapshot):
    gallery = GalleryController(snapshot[0])

    assert gallery.select_image(1) is True
    assert gallery.active_image.source == "img/1b.jpg"
    assert gallery.active_image.alt_text == "Cucina"
    assert [thumb.active for thumb in gallery.thumbnails] == [False, True]


def test_out_of_range_selection_is_ignored(snapshot):
    gallery = GalleryController(snapshot[0])
    gallery.select_image(1)

    assert gallery.select_image(2) is False
    assert gallery.select_image(-1) is False
    assert gallery.active_index == 1


def test_no_images_shows_placeholder(snapshot):
    gallery = GalleryController(snapshot[1], Settings(placeholder_image="img/placeholder.jpg"))

    assert gallery.select_image(0) is False
    assert gallery.active_image.source == "img/placeholder.jpg"
    assert gallery.active_image.alt_text == "Bilocale Termini"
    assert gallery.thumbnails == []


def test_single_image_has_no_thumbnails(snapshot):
    assert GalleryController(snapshot[2]).thumbnails == []

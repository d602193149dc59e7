"""
Location-fragment router and photo carousel tests.
"""
import pytest

from showcase.views.carousel import PhotoCarousel
from showcase.views.router import Route, View, fragment_for, resolve


@pytest.mark.parametrize("fragment, expected", [
    ("/vehicle/abc123", Route(View.VEHICLE_DETAIL, "abc123")),
    ("#/vehicle/abc123", Route(View.VEHICLE_DETAIL, "abc123")),
    ("", Route(View.HOME)),
    (None, Route(View.HOME)),
    ("#", Route(View.HOME)),
    ("/", Route(View.HOME)),
    ("/nonexistent", Route(View.HOME)),
    ("/admin", Route(View.ADMIN)),
    ("#/upload", Route(View.UPLOAD)),
    ("/download", Route(View.DOWNLOAD)),
    ("/vehicle/", Route(View.HOME)),
    ("/vehicle/abc123/photos", Route(View.VEHICLE_DETAIL, "abc123")),
    ("/Admin", Route(View.HOME)),
])
def test_resolve(fragment, expected):
    assert resolve(fragment) == expected


@pytest.mark.parametrize("route", [
    Route(View.HOME),
    Route(View.VEHICLE_DETAIL, "abc123"),
    Route(View.ADMIN),
    Route(View.UPLOAD),
    Route(View.DOWNLOAD),
])
def test_fragment_round_trip(route):
    assert resolve(fragment_for(route)) == route


def test_fragments():
    assert fragment_for(Route(View.HOME)) == "#/"
    assert fragment_for(Route(View.VEHICLE_DETAIL, "x1")) == "#/vehicle/x1"
    assert fragment_for(Route(View.ADMIN)) == "#/admin"


PHOTOS = [
    {"photo_type": "front_corner", "photo_url": "a"},
    {"photo_type": "driver_side", "photo_url": "b"},
    {"photo_type": "interior_front", "photo_url": "c"},
]


class TestPhotoCarousel:
    def test_wraps_in_both_directions(self):
        carousel = PhotoCarousel(PHOTOS)
        assert carousel.previous()["photo_url"] == "c"
        assert carousel.next()["photo_url"] == "a"
        carousel.next()
        carousel.next()
        assert carousel.next()["photo_url"] == "a"

    def test_caption(self):
        carousel = PhotoCarousel(PHOTOS)
        assert carousel.caption() == "1 of 3 - Passenger Front Corner"
        carousel.select(2)
        assert carousel.caption() == "3 of 3 - Interior - Front Seats"

    def test_select_out_of_range(self):
        with pytest.raises(IndexError):
            PhotoCarousel(PHOTOS).select(3)

    def test_empty(self):
        carousel = PhotoCarousel([])
        assert carousel.current is None
        assert carousel.next() is None
        assert carousel.caption() == "No photos available"

"""Tests for the Nominatim geocoder adapter (geopy client mocked)."""

from unittest.mock import MagicMock

import pytest
from geopy.exc import GeocoderTimedOut, GeocoderUnavailable

from poi_bridge.adapters.cache import InMemoryCache
from poi_bridge.adapters.geocoding import NominatimGeocoderAdapter
from poi_bridge.config import GeocodingConfig
from poi_bridge.domain.errors import GeocodeUnavailable
from poi_bridge.domain.models import GeocodeCandidate

RENNES_RAW = {
    "lat": "48.1113387",
    "lon": "-1.6800198",
    "display_name": "Rennes, Ille-et-Vilaine, Bretagne, France",
    "class": "boundary",
    "type": "administrative",
}


def _location(raw):
    location = MagicMock()
    location.raw = raw
    return location


@pytest.fixture()
def geolocator():
    return MagicMock()


def _adapter(geolocator, cache=None):
    return NominatimGeocoderAdapter(
        config=GeocodingConfig(),
        cache=cache if cache is not None else InMemoryCache(name="test"),
        _geolocator=geolocator,
    )


def test_search_returns_first_candidate(geolocator):
    geolocator.geocode.return_value = _location(RENNES_RAW)

    candidate = _adapter(geolocator).search("Rennes")

    geolocator.geocode.assert_called_once_with("Rennes", exactly_one=True)
    assert candidate == GeocodeCandidate(
        latitude=48.1113387,
        longitude=-1.6800198,
        display_name="Rennes, Ille-et-Vilaine, Bretagne, France",
        place_type="administrative",
    )


def test_class_used_when_type_missing(geolocator):
    raw = dict(RENNES_RAW)
    del raw["type"]
    geolocator.geocode.return_value = _location(raw)

    assert _adapter(geolocator).search("Rennes").place_type == "boundary"


def test_no_result_raises(geolocator):
    geolocator.geocode.return_value = None

    with pytest.raises(GeocodeUnavailable) as exc_info:
        _adapter(geolocator).search("Atlantis")

    assert exc_info.value.query == "Atlantis"


@pytest.mark.parametrize("error", [GeocoderTimedOut("slow"), GeocoderUnavailable("down")])
def test_service_errors_raise_geocode_unavailable(geolocator, error):
    geolocator.geocode.side_effect = error

    with pytest.raises(GeocodeUnavailable) as exc_info:
        _adapter(geolocator).search("Rennes")

    assert exc_info.value.cause is error


def test_malformed_result_raises(geolocator):
    geolocator.geocode.return_value = _location({"display_name": "no coords"})

    with pytest.raises(GeocodeUnavailable):
        _adapter(geolocator).search("Rennes")


def test_empty_query_does_not_call_service(geolocator):
    with pytest.raises(GeocodeUnavailable):
        _adapter(geolocator).search("  ")

    geolocator.geocode.assert_not_called()


def test_successful_lookups_are_cached(geolocator):
    geolocator.geocode.return_value = _location(RENNES_RAW)
    adapter = _adapter(geolocator, cache=InMemoryCache(name="test"))

    first = adapter.search("Rennes")
    second = adapter.search("  rennes ")

    assert first == second
    geolocator.geocode.assert_called_once()


def test_failures_are_not_cached(geolocator):
    geolocator.geocode.side_effect = [None, _location(RENNES_RAW)]
    adapter = _adapter(geolocator, cache=InMemoryCache(name="test"))

    with pytest.raises(GeocodeUnavailable):
        adapter.search("Rennes")

    assert adapter.search("Rennes").latitude == pytest.approx(48.1113387)

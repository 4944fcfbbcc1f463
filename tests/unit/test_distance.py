"""Tests for distance helpers."""

import math

import pytest

from campus_directory.config import CAMPUS_CENTER
from campus_directory.core.geo.distance import (
    SENTINEL,
    compare_by_distance,
    coordinate_of,
    distance_km,
    has_valid_location,
    haversine_km,
    within_km,
)
from campus_directory.core.geo.location import StaticLocationProvider
from campus_directory.models.items import Coordinate
from campus_directory.protocols import LocationProviderProtocol
from tests.unit.fakes import Located


def test_haversine_known_distance() -> None:
    # One degree of latitude is roughly 111.2 km.
    d = haversine_km(Coordinate(0.0, 10.0), Coordinate(1.0, 10.0))
    assert d == pytest.approx(111.2, abs=0.1)


def test_haversine_zero_for_same_point() -> None:
    here = Coordinate(37.87, -122.26)
    assert haversine_km(here, here) == 0.0


@pytest.mark.parametrize(
    ("latitude", "longitude"),
    [(None, -122.26), (37.87, None), (math.nan, -122.26), (37.87, math.inf)],
)
def test_unusable_coordinates_map_to_sentinel(
    latitude: float | None, longitude: float | None
) -> None:
    item = Located("x", latitude, longitude)
    assert coordinate_of(item) == SENTINEL
    assert not has_valid_location(item)


def test_item_without_location_facet_maps_to_sentinel() -> None:
    assert coordinate_of(object()) == SENTINEL


def test_zero_on_either_axis_is_not_a_valid_location() -> None:
    assert not has_valid_location(Located("x", 0.0, -122.26))
    assert not has_valid_location(Located("x", 37.87, 0.0))
    assert has_valid_location(Located("x", 37.87, -122.26))


def test_missing_reference_uses_campus_center() -> None:
    item = Located("x", *CAMPUS_CENTER)
    assert distance_km(None, item) == pytest.approx(0.0)


def test_compare_by_distance_is_antisymmetric() -> None:
    compare = compare_by_distance(Coordinate(37.87, -122.26))
    near = Located("near", 37.871, -122.26)
    far = Located("far", 37.9, -122.26)
    assert compare(near, far) == -1
    assert compare(far, near) == 1
    assert compare(near, Located("twin", 37.871, -122.26)) == 0


def test_within_km_requires_valid_location() -> None:
    inside = within_km(Coordinate(37.87, -122.26), 5.0)
    assert inside(Located("close", 37.88, -122.26))
    assert not inside(Located("far", 38.5, -122.26))
    assert not inside(Located("unplaced"))


def test_static_provider_satisfies_location_protocol() -> None:
    provider = StaticLocationProvider(Coordinate(37.87, -122.26))
    assert isinstance(provider, LocationProviderProtocol)
    assert provider.current_location() == Coordinate(37.87, -122.26)
    assert StaticLocationProvider().current_location() is None

"""Tests for catalog JSON parsing."""

from datetime import time

import pytest

from campus_directory.core.importer.json_reader import (
    parse_catalog,
    parse_library,
    parse_marker_group,
    parse_resource,
    parse_weekly_hours,
)
from campus_directory.models.hours import OpenInterval
from campus_directory.models.items import ItemKind, MapMarkerType, Occupancy, ResourceCategory
from tests.unit.conftest import SAMPLE_CATALOG


def test_parse_weekly_hours() -> None:
    hours = parse_weekly_hours({"Monday": [["08:00", "17:30"]], "sun": [["22:00", "02:00"]]})
    assert hours is not None
    assert hours.intervals_on(0) == (OpenInterval(time(8, 0), time(17, 30)),)
    assert hours.intervals_on(6)[0].crosses_midnight
    assert hours.intervals_on(3) == ()


def test_parse_weekly_hours_accepts_24_as_midnight() -> None:
    hours = parse_weekly_hours({"fri": [["18:00", "24:00"]]})
    assert hours is not None
    assert hours.intervals_on(4)[0].closes == time(0, 0)


def test_parse_weekly_hours_empty_is_none() -> None:
    assert parse_weekly_hours(None) is None
    assert parse_weekly_hours({}) is None


def test_parse_weekly_hours_rejects_unknown_day() -> None:
    with pytest.raises(ValueError, match="Unknown weekday"):
        parse_weekly_hours({"someday": []})


def test_parse_library_fields() -> None:
    library = parse_library(SAMPLE_CATALOG["libraries"][0])
    assert library.name == "Doe Library"
    assert library.phone_number == "(510) 642-6657"
    assert library.occupancy == Occupancy(40)
    assert library.is_favorited
    assert library.location_description == "Doe Library, Berkeley, CA 94720"


def test_parse_library_defaults() -> None:
    library = parse_library({"name": "Bare"})
    assert library.weekly_hours is None
    assert library.latitude is None
    assert not library.is_favorited
    assert library.location_description == "Berkeley, CA"


def test_parse_resource_category() -> None:
    resource = parse_resource(SAMPLE_CATALOG["resources"][0])
    assert resource.category is ResourceCategory.HEALTH
    assert resource.description == "Student health services"


def test_parse_marker_group_assigns_group_type() -> None:
    group = parse_marker_group(SAMPLE_CATALOG["map"][0])
    assert group.kind is MapMarkerType.CAFE
    assert [m.type for m in group.markers] == [MapMarkerType.CAFE, MapMarkerType.CAFE]


def test_parse_catalog_skips_malformed_entries() -> None:
    catalog = parse_catalog(SAMPLE_CATALOG)
    assert [lib.name for lib in catalog[ItemKind.LIBRARIES]] == ["Doe Library", "Moffitt Library"]
    assert len(catalog[ItemKind.DINING]) == 1
    assert len(catalog[ItemKind.MAP]) == 2


def test_parse_catalog_fills_absent_kinds() -> None:
    catalog = parse_catalog({})
    assert all(catalog[kind] == [] for kind in ItemKind)

"""Shared test fixtures."""

import json
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, time
from pathlib import Path
from typing import Any

import pytest

from campus_directory.models.hours import OpenInterval, WeeklyHours
from campus_directory.models.items import (
    Coordinate,
    Library,
    MapMarker,
    MapMarkerType,
    MarkerGroup,
)

# A Monday, midday.
MONDAY_NOON = datetime(2026, 10, 19, 12, 0)

SODA_HALL = Coordinate(37.8756, -122.2588)

WEEKDAY_DAYTIME = WeeklyHours.from_mapping(
    {day: [OpenInterval(time(8, 0), time(17, 0))] for day in range(5)}
)
EVENINGS_ONLY = WeeklyHours.from_mapping(
    {day: [OpenInterval(time(18, 0), time(2, 0))] for day in range(7)}
)

SAMPLE_CATALOG: dict[str, Any] = {
    "libraries": [
        {
            "name": "Doe Library",
            "address": "Doe Library, Berkeley, CA 94720",
            "phone": "(510) 642-6657",
            "hours": {"mon": [["08:00", "22:00"]], "tue": [["08:00", "22:00"]]},
            "latitude": 37.8722,
            "longitude": -122.2596,
            "occupancy": 40,
            "favorited": True,
        },
        {
            "name": "Moffitt Library",
            "hours": {"sat": [["10:00", "18:00"]]},
            "latitude": 37.8725,
            "longitude": -122.2608,
        },
        {"name": "Broken Library", "hours": {"someday": [["08:00", "10:00"]]}},
    ],
    "dining": [
        {
            "name": "Crossroads",
            "address": "2415 Bowditch St",
            "latitude": 37.8665,
            "longitude": -122.2563,
        }
    ],
    "resources": [
        {
            "name": "Tang Center",
            "category": "Health",
            "description": "Student health services",
            "latitude": 37.8676,
            "longitude": -122.2641,
        }
    ],
    "map": [
        {
            "type": "Cafe",
            "markers": [
                {"name": "Free Speech Cafe", "latitude": 37.8726, "longitude": -122.2600},
                {"name": "Yali's", "latitude": 37.8746, "longitude": -122.2585},
            ],
        },
        {
            "type": "Printer",
            "markers": [{"name": "Moffitt Printer", "latitude": 37.8725, "longitude": -122.2608}],
        },
    ],
}


def make_library(name: str, **kwargs: Any) -> Library:
    return Library(name=name, **kwargs)


@pytest.fixture
def libraries() -> list[Library]:
    """Three libraries: one open and favorited, one open, one closed and unplaced."""
    return [
        make_library(
            "Moffitt",
            weekly_hours=WEEKDAY_DAYTIME,
            latitude=37.8725,
            longitude=-122.2650,
        ),
        make_library(
            "Doe",
            weekly_hours=WEEKDAY_DAYTIME,
            latitude=37.8722,
            longitude=-122.2596,
            is_favorited=True,
        ),
        make_library("Annex", weekly_hours=EVENINGS_ONLY),
    ]


@pytest.fixture
def marker_groups() -> list[MarkerGroup]:
    cafe = MapMarkerType.CAFE
    printer = MapMarkerType.PRINTER
    return [
        MarkerGroup(cafe, (MapMarker("Free Speech Cafe", cafe, 37.8726, -122.26),)),
        MarkerGroup(printer, (MapMarker("Moffitt Printer", printer, 37.8725, -122.2608),)),
        MarkerGroup(MapMarkerType.NAP_POD),
    ]


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(SAMPLE_CATALOG), encoding="utf-8")
    return path


@pytest.fixture
def executor() -> Iterator[ThreadPoolExecutor]:
    """Worker pool with room for a blocked job and the one that supersedes it."""
    pool = ThreadPoolExecutor(max_workers=4)
    yield pool
    pool.shutdown(wait=False, cancel_futures=True)

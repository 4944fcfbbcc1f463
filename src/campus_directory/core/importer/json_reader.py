"""Parse a campus catalog JSON document into domain models."""

from datetime import time
from typing import Any

from loguru import logger

from campus_directory.models.hours import OpenInterval, WeeklyHours
from campus_directory.models.items import (
    DiningLocation,
    ItemKind,
    Library,
    MapMarker,
    MapMarkerType,
    MarkerGroup,
    Occupancy,
    Resource,
    ResourceCategory,
)

WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


def _parse_time(raw: str) -> time:
    hour, _, minute = raw.partition(":")
    return time(int(hour) % 24, int(minute or 0))


def parse_weekly_hours(raw: dict[str, Any] | None) -> WeeklyHours | None:
    """Parse ``{"mon": [["08:00", "17:00"]], ...}`` into WeeklyHours.

    Returns None when no hours are given at all.
    """
    if not raw:
        return None
    mapping: dict[int, list[OpenInterval]] = {}
    for day, intervals in raw.items():
        key = day.lower()[:3]
        if key not in WEEKDAYS:
            msg = f"Unknown weekday {day!r}"
            raise ValueError(msg)
        mapping[WEEKDAYS.index(key)] = [
            OpenInterval(_parse_time(opens), _parse_time(closes)) for opens, closes in intervals
        ]
    return WeeklyHours.from_mapping(mapping)


def _coordinate(raw: dict[str, Any], key: str) -> float | None:
    value = raw.get(key)
    return float(value) if value is not None else None


def _occupancy(raw: dict[str, Any]) -> Occupancy | None:
    value = raw.get("occupancy")
    return Occupancy(int(value)) if value is not None else None


def parse_library(raw: dict[str, Any]) -> Library:
    return Library(
        name=raw["name"],
        address=raw.get("address"),
        phone_number=raw.get("phone"),
        weekly_hours=parse_weekly_hours(raw.get("hours")),
        image_url=raw.get("image_url"),
        latitude=_coordinate(raw, "latitude"),
        longitude=_coordinate(raw, "longitude"),
        occupancy=_occupancy(raw),
        is_favorited=bool(raw.get("favorited", False)),
        by_appointment=tuple(bool(b) for b in raw.get("by_appointment", ())),
    )


def parse_dining(raw: dict[str, Any]) -> DiningLocation:
    return DiningLocation(
        name=raw["name"],
        address=raw.get("address"),
        phone_number=raw.get("phone"),
        weekly_hours=parse_weekly_hours(raw.get("hours")),
        image_url=raw.get("image_url"),
        latitude=_coordinate(raw, "latitude"),
        longitude=_coordinate(raw, "longitude"),
        occupancy=_occupancy(raw),
        is_favorited=bool(raw.get("favorited", False)),
    )


def parse_resource(raw: dict[str, Any]) -> Resource:
    category = raw.get("category")
    return Resource(
        name=raw["name"],
        address=raw.get("address"),
        description=raw.get("description") or "",
        category=ResourceCategory(category) if category else None,
        weekly_hours=parse_weekly_hours(raw.get("hours")),
        latitude=_coordinate(raw, "latitude"),
        longitude=_coordinate(raw, "longitude"),
    )


def parse_marker_group(raw: dict[str, Any]) -> MarkerGroup:
    """Parse one map group; every marker takes the group's type."""
    kind = MapMarkerType(raw["type"])
    markers = tuple(
        MapMarker(
            name=m["name"],
            type=kind,
            latitude=_coordinate(m, "latitude"),
            longitude=_coordinate(m, "longitude"),
            description=m.get("description") or "",
            address=m.get("address"),
        )
        for m in raw.get("markers", [])
    )
    return MarkerGroup(kind=kind, markers=markers)


_PARSERS = {
    ItemKind.LIBRARIES: parse_library,
    ItemKind.DINING: parse_dining,
    ItemKind.RESOURCES: parse_resource,
    ItemKind.MAP: parse_marker_group,
}


def parse_catalog(data: dict[str, Any]) -> dict[ItemKind, list[Any]]:
    """Parse a whole catalog document.

    Malformed entries are skipped with a warning so one bad record does not
    hide the rest of its collection.

    Args:
        data: Raw catalog data, keyed by ItemKind value.

    Returns:
        Parsed entries for every kind (empty lists for absent kinds).
    """
    catalog: dict[ItemKind, list[Any]] = {}
    for kind, parser in _PARSERS.items():
        entries: list[Any] = []
        for position, raw in enumerate(data.get(kind.value, [])):
            try:
                entries.append(parser(raw))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping {} entry {}: {}", kind.value, position, exc)
        catalog[kind] = entries
    return catalog

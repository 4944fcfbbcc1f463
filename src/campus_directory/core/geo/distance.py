"""Great-circle distances and distance-based ordering."""

import math
from collections.abc import Callable
from typing import Any

from campus_directory.config import CAMPUS_CENTER, EARTH_RADIUS_KM
from campus_directory.models.items import Coordinate

SENTINEL = Coordinate(0.0, 0.0)


def _usable(value: Any) -> bool:
    return isinstance(value, int | float) and math.isfinite(value)


def coordinate_of(item: object) -> Coordinate:
    """Return the item's coordinate, or the (0, 0) sentinel if it has none.

    Never raises: items without the location facet, with a missing axis or
    with a non-finite axis all map to the sentinel.
    """
    lat = getattr(item, "latitude", None)
    lon = getattr(item, "longitude", None)
    if not (_usable(lat) and _usable(lon)):
        return SENTINEL
    return Coordinate(float(lat), float(lon))


def has_valid_location(item: object) -> bool:
    """True if the item is placed somewhere real.

    A zero on either axis counts as the unknown-location sentinel.
    """
    coord = coordinate_of(item)
    return coord.latitude != 0 and coord.longitude != 0


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two WGS84 points, in kilometers."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    dphi = phi2 - phi1
    dlambda = math.radians(b.longitude - a.longitude)

    h = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    return 2.0 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))


def _reference_or_default(reference: Coordinate | None) -> Coordinate:
    if reference is None:
        return Coordinate(*CAMPUS_CENTER)
    return reference


def distance_km(reference: Coordinate | None, item: object) -> float:
    return haversine_km(_reference_or_default(reference), coordinate_of(item))


def compare_by_distance(reference: Coordinate | None) -> Callable[[object, object], int]:
    """Build a comparator ordering items nearest-first from ``reference``.

    Without a reference the campus center is used. Equal distances compare
    as 0 so the sort stage keeps their input order.
    """
    origin = _reference_or_default(reference)

    def compare(a: object, b: object) -> int:
        da = haversine_km(origin, coordinate_of(a))
        db = haversine_km(origin, coordinate_of(b))
        return (da > db) - (da < db)

    return compare


def within_km(reference: Coordinate | None, radius_km: float) -> Callable[[object], bool]:
    """Build a predicate accepting items with a valid location inside the radius."""
    origin = _reference_or_default(reference)

    def predicate(item: object) -> bool:
        return has_valid_location(item) and haversine_km(origin, coordinate_of(item)) <= radius_km

    return predicate

"""Domain models for campus items."""

import weakref
from dataclasses import dataclass, field
from enum import Enum
from collections.abc import Callable
from typing import Any

from campus_directory.config import DEFAULT_LOCATION_DESCRIPTION
from campus_directory.models.hours import WeeklyHours


class ItemKind(str, Enum):
    """Collections a data source can deliver."""

    LIBRARIES = "libraries"
    DINING = "dining"
    RESOURCES = "resources"
    MAP = "map"


class ResourceCategory(str, Enum):
    HEALTH = "Health"
    FINANCES = "Finances"
    LEGAL = "Legal"
    BASIC_NEEDS = "Basic Needs"
    ADMIN = "Admin"


class MapMarkerType(str, Enum):
    """Kinds of point-of-interest shown on the campus map."""

    MENTAL_HEALTH = "Mental Health"
    MICROWAVE = "Microwave"
    NAP_POD = "Nap Pod"
    PRINTER = "Printer"
    WATER_FOUNTAIN = "Water Fountain"
    BIKES = "Bikes"
    LACTATION = "Lactation"
    CAFE = "Cafe"
    STORE = "Store"


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Occupancy:
    """Live occupancy reading, in percent of capacity."""

    percent: int


@dataclass(frozen=True)
class Library:
    name: str
    address: str | None = None
    phone_number: str | None = None
    weekly_hours: WeeklyHours | None = None
    image_url: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    occupancy: Occupancy | None = None
    is_favorited: bool = False
    by_appointment: tuple[bool, ...] = ()

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def location_description(self) -> str:
        return self.address or DEFAULT_LOCATION_DESCRIPTION


@dataclass(frozen=True)
class DiningLocation:
    name: str
    address: str | None = None
    phone_number: str | None = None
    weekly_hours: WeeklyHours | None = None
    image_url: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    occupancy: Occupancy | None = None
    is_favorited: bool = False

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def location_description(self) -> str:
        return self.address or DEFAULT_LOCATION_DESCRIPTION


@dataclass(frozen=True)
class Resource:
    """A campus-wide support resource (health, legal aid, ...)."""

    name: str
    address: str | None = None
    description: str = ""
    category: ResourceCategory | None = None
    weekly_hours: WeeklyHours | None = None
    latitude: float | None = None
    longitude: float | None = None

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def location_description(self) -> str:
        return self.address or DEFAULT_LOCATION_DESCRIPTION


@dataclass(frozen=True)
class MapMarker:
    name: str
    type: MapMarkerType
    latitude: float | None = None
    longitude: float | None = None
    description: str = ""
    address: str | None = None

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def location_description(self) -> str:
        return self.address or DEFAULT_LOCATION_DESCRIPTION


@dataclass(frozen=True)
class MarkerGroup:
    """Map markers of a single kind, filtered and shown as one unit."""

    kind: MapMarkerType
    markers: tuple[MapMarker, ...] = ()

    def __post_init__(self) -> None:
        stray = [m.name for m in self.markers if m.type != self.kind]
        if stray:
            msg = f"Markers {stray!r} do not belong in a {self.kind.value!r} group"
            raise ValueError(msg)

    @property
    def representative(self) -> MapMarker | None:
        return self.markers[0] if self.markers else None

    def __len__(self) -> int:
        return len(self.markers)


def item_reference(item: object) -> Callable[[], Any]:
    """Weak reference to ``item``, or a plain getter if it cannot be weakly referenced.

    Slotted classes and tuples (NamedTuple items) have no weakref support;
    those placemarks keep their item alive.
    """
    try:
        return weakref.ref(item)
    except TypeError:
        return lambda: item


@dataclass(frozen=True)
class Placemark:
    """A search hit, pointing back at the item it came from."""

    coordinate: Coordinate
    display_name: str
    location_description: str
    item_ref: Callable[[], Any] = field(repr=False, compare=False)

    @property
    def item(self) -> Any | None:
        """The originating item, or None once the data source dropped it."""
        return self.item_ref()

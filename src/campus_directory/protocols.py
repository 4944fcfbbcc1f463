"""Capability protocols for campus items and the collaborators of the engine.

Items never inherit from these; any object exposing the right attributes
satisfies a protocol structurally.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from campus_directory.models.hours import WeeklyHours
    from campus_directory.models.items import Coordinate, ItemKind, Occupancy, Placemark


@runtime_checkable
class Searchable(Protocol):
    """Anything that can be listed and matched by name."""

    @property
    def display_name(self) -> str: ...

    @property
    def location_description(self) -> str: ...


@runtime_checkable
class Locatable(Protocol):
    """An item that may know where it is."""

    @property
    def latitude(self) -> float | None: ...

    @property
    def longitude(self) -> float | None: ...


@runtime_checkable
class Favoritable(Protocol):
    @property
    def is_favorited(self) -> bool: ...


@runtime_checkable
class HasOpenTimes(Protocol):
    """An item with a weekly opening schedule."""

    @property
    def weekly_hours(self) -> "WeeklyHours | None": ...


@runtime_checkable
class HasOccupancy(Protocol):
    @property
    def occupancy(self) -> "Occupancy | None": ...


@runtime_checkable
class HasImage(Protocol):
    @property
    def image_url(self) -> str | None: ...


@runtime_checkable
class HasPhoneNumber(Protocol):
    @property
    def phone_number(self) -> str | None: ...


@runtime_checkable
class DataSourceProtocol(Protocol):
    """Protocol for sources that deliver item collections."""

    async def fetch(self, kind: "ItemKind") -> Sequence[Any]:
        """Return a fresh snapshot of every item of the given kind."""
        ...

    async def searchable(self) -> Sequence[Searchable]:
        """Return every item that takes part in keyword search."""
        ...


@runtime_checkable
class LocationProviderProtocol(Protocol):
    """Protocol for whatever knows the user's position."""

    def current_location(self) -> "Coordinate | None":
        """Return the latest fix, or None when there is none."""
        ...


@runtime_checkable
class SearchResultsConsumer(Protocol):
    """Protocol for the view that shows search results."""

    def show_placemarks(self, placemarks: list["Placemark"]) -> None:
        """Replace the displayed results."""
        ...

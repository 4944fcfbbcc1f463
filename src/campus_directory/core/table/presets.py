"""Standard table functions for each kind of campus collection."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from campus_directory.config import NEARBY_RADIUS_KM
from campus_directory.core.geo.distance import compare_by_distance, within_km
from campus_directory.core.table.filter_table import FilterTable
from campus_directory.core.table.functions import (
    Comparator,
    Filter,
    Sort,
    TableFunction,
    compare_alphabetical,
    keep_order,
)
from campus_directory.models.items import ItemKind, MapMarkerType, MarkerGroup
from campus_directory.protocols import Favoritable, HasOpenTimes, LocationProviderProtocol

Clock = Callable[[], datetime]


def is_open_now(item: HasOpenTimes, at: datetime) -> bool | None:
    """Whether the item is open at ``at``; None when its hours are unknown."""
    hours = getattr(item, "weekly_hours", None)
    if hours is None:
        return None
    return hours.is_open_at(at)


def open_filter(clock: Clock = datetime.now) -> Filter[Any]:
    """Items open right now. Unknown hours count as closed.

    Each evaluation reads the clock once and judges every item at that instant.
    """

    def at_instant() -> Callable[[Any], bool]:
        at = clock()
        return lambda item: is_open_now(item, at) or False

    return Filter("Open", lambda item: is_open_now(item, clock()) or False, prepare=at_instant)


def favorites_filter() -> Filter[Any]:
    return Filter("Favorites", lambda item: isinstance(item, Favoritable) and item.is_favorited)


def nearby_sort(location: LocationProviderProtocol | None) -> Sort[Any]:
    """Nearest first, measured from the provider's fix when the preset is built."""
    reference = location.current_location() if location is not None else None
    return Sort("Nearby", compare_by_distance(reference))


def within_radius_filter(location: LocationProviderProtocol | None) -> Filter[Any]:
    """Items inside the walking radius of the current fix."""
    reference = location.current_location() if location is not None else None
    return Filter("Within 10 mi", within_km(reference, NEARBY_RADIUS_KM))


def marker_type_filters() -> list[Filter[MarkerGroup]]:
    """One filter per map marker type, matching on the group's kind tag."""

    def matches(kind: MapMarkerType) -> Callable[[MarkerGroup], bool]:
        return lambda group: len(group) > 0 and group.kind == kind

    return [Filter(kind.value, matches(kind)) for kind in MapMarkerType]


@dataclass(frozen=True)
class TablePreset:
    """Everything needed to build the FilterTable for one collection."""

    functions: tuple[TableFunction[Any], ...]
    default_sort: Comparator[Any]
    initial_selection: tuple[int, ...] = ()
    multiple_filters: bool = True
    grouped: bool = False

    def build(self, **kwargs: Any) -> FilterTable[Any]:
        return FilterTable(
            self.functions,
            default_sort=self.default_sort,
            initial_selection=self.initial_selection,
            multiple_filters=self.multiple_filters,
            grouped=self.grouped,
            **kwargs,
        )


def preset_for(
    kind: ItemKind,
    *,
    location: LocationProviderProtocol | None = None,
    clock: Clock = datetime.now,
) -> TablePreset:
    """Return the table functions a view of ``kind`` starts with."""
    if kind in (ItemKind.LIBRARIES, ItemKind.DINING):
        return TablePreset(
            functions=(nearby_sort(location), open_filter(clock), favorites_filter()),
            default_sort=compare_alphabetical,
            initial_selection=(0,),
        )
    if kind is ItemKind.RESOURCES:
        return TablePreset(
            functions=(
                nearby_sort(location),
                open_filter(clock),
                within_radius_filter(location),
            ),
            default_sort=compare_alphabetical,
            initial_selection=(0,),
        )
    if kind is ItemKind.MAP:
        return TablePreset(
            functions=tuple(marker_type_filters()),
            default_sort=keep_order,
            multiple_filters=False,
            grouped=True,
        )
    msg = f"No preset for {kind!r}"
    raise ValueError(msg)

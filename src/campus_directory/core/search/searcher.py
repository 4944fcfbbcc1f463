"""Keyword search over every searchable campus item."""

from collections.abc import Iterable

from campus_directory.core.geo.distance import coordinate_of, has_valid_location
from campus_directory.models.items import Placemark, item_reference
from campus_directory.protocols import Searchable


def matches(keyword: str, item: Searchable) -> bool:
    """Case-sensitive substring match on the display name, location required."""
    return keyword in item.display_name and has_valid_location(item)


def search(keyword: str, corpus: Iterable[Searchable]) -> list[Placemark]:
    """Return one placemark per matching item, in corpus order.

    An empty keyword matches every item that has a valid location.
    """
    return [
        Placemark(
            coordinate=coordinate_of(item),
            display_name=item.display_name,
            location_description=item.location_description,
            item_ref=item_reference(item),
        )
        for item in corpus
        if matches(keyword, item)
    ]

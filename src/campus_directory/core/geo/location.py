"""Location providers."""

from campus_directory.models.items import Coordinate


class StaticLocationProvider:
    """Reports a fixed position, or no fix at all."""

    def __init__(self, coordinate: Coordinate | None = None) -> None:
        self.coordinate = coordinate

    def current_location(self) -> Coordinate | None:
        return self.coordinate

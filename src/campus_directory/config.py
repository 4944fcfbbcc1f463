"""Configuration constants for campus-directory."""

import os
from pathlib import Path

# Catalog location. First file found is used.
CATALOG_FILES: list[Path] = [
    Path("~/.config/campus-directory/catalog.json").expanduser(),
    Path("~/.local/share/campus-directory/catalog.json").expanduser(),
    Path("catalog.json"),
]

# Overrides CATALOG_FILES when set.
CATALOG_ENV_VAR: str = "CAMPUS_DIRECTORY_CATALOG"

# Reference point for distance sorting when there is no location fix.
CAMPUS_CENTER: tuple[float, float] = (37.871684, -122.259934)

# Shown for items without an address.
DEFAULT_LOCATION_DESCRIPTION: str = "Berkeley, CA"

# Radius used by the "nearby" predicate (10 miles).
NEARBY_RADIUS_KM: float = 16.09

# Mean Earth radius (km), IUGG.
EARTH_RADIUS_KM: float = 6371.0088

# Flat collections check for cancellation once per this many items.
CHECKPOINT_INTERVAL: int = 512


def resolve_catalog_path() -> Path | None:
    """Return the catalog file to load, or None if none exists."""
    override = os.environ.get(CATALOG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    for candidate in CATALOG_FILES:
        if candidate.is_file():
            return candidate
    return None

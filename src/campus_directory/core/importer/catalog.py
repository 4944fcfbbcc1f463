"""Data source reading a campus catalog from a JSON file."""

import asyncio
import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from loguru import logger

from campus_directory.core.importer.json_reader import parse_catalog
from campus_directory.models.items import ItemKind
from campus_directory.protocols import Searchable


class JsonCatalogSource:
    """Loads the catalog file once, off the event loop, and serves snapshots."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._catalog: dict[ItemKind, list[Any]] | None = None
        self._lock = asyncio.Lock()

    def _read(self) -> dict[ItemKind, list[Any]]:
        if not self.path.is_file():
            msg = f"Catalog file not found: {self.path}"
            raise FileNotFoundError(msg)
        catalog = parse_catalog(json.loads(self.path.read_text(encoding="utf-8")))
        logger.info(
            "Loaded catalog {}: {}",
            self.path,
            ", ".join(f"{len(v)} {k.value}" for k, v in catalog.items()),
        )
        return catalog

    async def _load(self) -> dict[ItemKind, list[Any]]:
        async with self._lock:
            if self._catalog is None:
                self._catalog = await asyncio.to_thread(self._read)
            return self._catalog

    async def fetch(self, kind: ItemKind) -> Sequence[Any]:
        catalog = await self._load()
        return tuple(catalog[kind])

    async def searchable(self) -> Sequence[Searchable]:
        """Every item, with map groups flattened into their markers."""
        catalog = await self._load()
        items: list[Searchable] = []
        for kind, entries in catalog.items():
            if kind is ItemKind.MAP:
                for group in entries:  # MarkerGroup
                    items.extend(group.markers)
            else:
                items.extend(entries)
        return tuple(items)

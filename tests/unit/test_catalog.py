"""Tests for the JSON catalog data source."""

import asyncio
from pathlib import Path

import pytest

from campus_directory.core.importer.catalog import JsonCatalogSource
from campus_directory.models.items import ItemKind, MapMarker
from campus_directory.protocols import DataSourceProtocol


def test_catalog_source_satisfies_protocol(catalog_file: Path) -> None:
    assert isinstance(JsonCatalogSource(catalog_file), DataSourceProtocol)


def test_fetch_returns_parsed_collection(catalog_file: Path) -> None:
    source = JsonCatalogSource(catalog_file)
    libraries = asyncio.run(source.fetch(ItemKind.LIBRARIES))
    assert [lib.name for lib in libraries] == ["Doe Library", "Moffitt Library"]


def test_catalog_is_read_once(catalog_file: Path) -> None:
    source = JsonCatalogSource(catalog_file)

    async def scenario() -> None:
        await source.fetch(ItemKind.DINING)
        catalog_file.unlink()
        await source.fetch(ItemKind.RESOURCES)

    asyncio.run(scenario())


def test_searchable_flattens_map_groups(catalog_file: Path) -> None:
    items = asyncio.run(JsonCatalogSource(catalog_file).searchable())
    names = [item.display_name for item in items]
    assert "Free Speech Cafe" in names
    assert "Moffitt Printer" in names
    assert all(not hasattr(item, "markers") for item in items)
    assert sum(isinstance(item, MapMarker) for item in items) == 3


def test_missing_catalog_raises(tmp_path: Path) -> None:
    source = JsonCatalogSource(tmp_path / "missing.json")
    with pytest.raises(FileNotFoundError):
        asyncio.run(source.fetch(ItemKind.MAP))

"""CLI for browsing a campus catalog (list, filter, sort, search)."""

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger

from campus_directory.config import resolve_catalog_path
from campus_directory.core.geo.distance import distance_km
from campus_directory.core.geo.location import StaticLocationProvider
from campus_directory.core.importer.catalog import JsonCatalogSource
from campus_directory.core.search.controller import SearchController
from campus_directory.core.table.functions import Sort
from campus_directory.core.table.presets import is_open_now, preset_for
from campus_directory.logging_config import configure_logging
from campus_directory.models.items import Coordinate, ItemKind, MarkerGroup, Placemark

app = typer.Typer(help="Campus directory: browse and search libraries, dining, resources and map.")

CatalogOption = Annotated[
    Path | None,
    typer.Option("--catalog", "-c", help="Catalog JSON file"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _open_source(catalog: Path | None) -> JsonCatalogSource:
    """Resolve the catalog file, raising if there is none."""
    path = catalog or resolve_catalog_path()
    if path is None or not path.is_file():
        logger.error("Catalog not found: {}", path or "no catalog file configured")
        raise typer.Exit(1)
    return JsonCatalogSource(path)


def _parse_kind(kind: str) -> ItemKind:
    try:
        return ItemKind(kind)
    except ValueError:
        logger.error("Unknown kind {!r}; expected one of {}", kind, [k.value for k in ItemKind])
        raise typer.Exit(1) from None


def _reference(lat: float | None, lon: float | None) -> Coordinate | None:
    if lat is None or lon is None:
        return None
    return Coordinate(lat, lon)


@app.command()
def kinds() -> None:
    """List the collections a catalog can hold."""
    for kind in ItemKind:
        typer.echo(kind.value)


@app.command()
def functions(kind: str = typer.Argument(..., help="Collection kind")) -> None:
    """Show the filters and sorts available for a collection."""
    preset = preset_for(_parse_kind(kind))
    for index, function in enumerate(preset.functions):
        tag = "sort" if isinstance(function, Sort) else "filter"
        marker = "*" if index in preset.initial_selection else " "
        typer.echo(f" {marker} [{index}] {tag:6} {function.label}")


def _row(element: Any, reference: Coordinate | None) -> dict[str, Any]:
    if isinstance(element, MarkerGroup):
        return {
            "kind": element.kind.value,
            "markers": [m.display_name for m in element.markers],
        }
    row: dict[str, Any] = {
        "name": element.display_name,
        "location": element.location_description,
        "distance_km": round(distance_km(reference, element), 2),
    }
    if hasattr(element, "weekly_hours"):
        row["open"] = is_open_now(element, datetime.now())
    for attr in ("phone_number", "is_favorited"):
        if hasattr(element, attr):
            row[attr] = getattr(element, attr)
    return row


async def _run_list(
    source: JsonCatalogSource,
    kind: ItemKind,
    *,
    filters: list[str],
    sort: str | None,
    default_order: bool,
    reference: Coordinate | None,
) -> tuple[Any, ...]:
    preset = preset_for(kind, location=StaticLocationProvider(reference))
    table = preset.build()
    indices: set[int] = set()
    if sort is not None:
        index = table.index_of(sort)
        if not isinstance(table.functions[index], Sort):
            msg = f"{sort!r} is a filter, not a sort"
            raise ValueError(msg)
        indices.add(index)
    elif not default_order:
        indices.update(preset.initial_selection)
    indices.update(table.index_of(label) for label in filters)

    table.set_selection(indices)
    table.set_data(await source.fetch(kind))
    return await table.settled()


@app.command(name="list")
def list_cmd(
    kind: str = typer.Argument(..., help="Collection kind (see 'kinds')"),
    filters: Annotated[
        list[str] | None,
        typer.Option("--filter", "-f", help="Filter label; repeat to match any of several"),
    ] = None,
    sort: Annotated[
        str | None,
        typer.Option("--sort", "-s", help="Sort label (default: the view's initial sort)"),
    ] = None,
    default_order: bool = typer.Option(
        False, "--default-order", help="Ignore the initial sort and use the default order"
    ),
    lat: Annotated[float | None, typer.Option("--lat", help="Reference latitude")] = None,
    lon: Annotated[float | None, typer.Option("--lon", help="Reference longitude")] = None,
    catalog: CatalogOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List a collection with filters and a sort applied."""
    item_kind = _parse_kind(kind)
    source = _open_source(catalog)
    reference = _reference(lat, lon)

    try:
        output = asyncio.run(
            _run_list(
                source,
                item_kind,
                filters=filters or [],
                sort=sort,
                default_order=default_order,
                reference=reference,
            )
        )
    except (KeyError, ValueError) as exc:
        logger.error("{}", exc)
        raise typer.Exit(1) from None

    rows = [_row(element, reference) for element in output]
    if output_json:
        typer.echo(json.dumps({"results": rows, "total": len(rows)}, indent=2))
        return

    typer.echo(f"{len(rows)} {item_kind.value}:\n")
    for row in rows:
        if "markers" in row:
            typer.echo(f"  {row['kind']} ({len(row['markers'])} markers)")
            for name in row["markers"]:
                typer.echo(f"    - {name}")
            continue
        extras = []
        if row.get("open") is not None:
            extras.append("open" if row["open"] else "closed")
        if row.get("is_favorited"):
            extras.append("favorite")
        suffix = f"  [{', '.join(extras)}]" if extras else ""
        typer.echo(f"  {row['name']} - {row['location']} ({row['distance_km']} km){suffix}")


class _CollectingView:
    def __init__(self) -> None:
        self.placemarks: list[Placemark] = []

    def show_placemarks(self, placemarks: list[Placemark]) -> None:
        self.placemarks = placemarks


async def _run_search(source: JsonCatalogSource, keyword: str) -> list[Placemark]:
    corpus = await source.searchable()
    view = _CollectingView()
    controller = SearchController(view, lambda: corpus)
    await controller.search(keyword)
    return view.placemarks


@app.command(name="search")
def search_cmd(
    keyword: str = typer.Argument("", help="Case-sensitive name fragment"),
    catalog: CatalogOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Search every located item by name."""
    source = _open_source(catalog)
    try:
        placemarks = asyncio.run(_run_search(source, keyword))
    except ValueError as exc:
        logger.error("Cannot read catalog: {}", exc)
        raise typer.Exit(1) from None

    if output_json:
        data = {
            "results": [
                {
                    "name": p.display_name,
                    "location": p.location_description,
                    "latitude": p.coordinate.latitude,
                    "longitude": p.coordinate.longitude,
                }
                for p in placemarks
            ],
            "total": len(placemarks),
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"Found {len(placemarks)} results:\n")
    for p in placemarks:
        typer.echo(f"  {p.display_name} - {p.location_description}")
        typer.echo(f"    ({p.coordinate.latitude:.5f}, {p.coordinate.longitude:.5f})")

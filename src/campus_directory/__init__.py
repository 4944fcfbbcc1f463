"""Filter, sort and search engine for campus directory views."""

from campus_directory.core.search.searcher import search
from campus_directory.core.table.engine import evaluate
from campus_directory.core.table.filter_table import FilterTable
from campus_directory.core.table.functions import Filter, Selection, Sort
from campus_directory.models.items import Placemark
from campus_directory.protocols import DataSourceProtocol, LocationProviderProtocol

__all__ = [
    "DataSourceProtocol",
    "Filter",
    "FilterTable",
    "LocationProviderProtocol",
    "Placemark",
    "Selection",
    "Sort",
    "evaluate",
    "search",
]

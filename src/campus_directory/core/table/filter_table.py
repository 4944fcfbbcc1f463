"""A filterable, sortable collection backing a table or map view."""

import asyncio
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import Executor
from typing import Generic, TypeVar

from loguru import logger

from campus_directory.config import CHECKPOINT_INTERVAL
from campus_directory.core.table.functions import (
    Comparator,
    Selection,
    SelectionController,
    TableFunction,
)
from campus_directory.core.table.recompute import Recomputer

T = TypeVar("T")


class FilterTable(Generic[T]):
    """Holds the source data, the selection and the displayed output.

    All methods run on the event loop. Every selection or data change
    schedules a recompute; only the newest one ever reaches the output.
    """

    def __init__(
        self,
        functions: Sequence[TableFunction[T]],
        *,
        default_sort: Comparator[T],
        initial_selection: Iterable[int] = (),
        multiple_filters: bool = True,
        grouped: bool = False,
        on_update: Callable[[tuple[T, ...]], None] | None = None,
        executor: Executor | None = None,
        checkpoint_every: int = CHECKPOINT_INTERVAL,
    ) -> None:
        self._controller: SelectionController[T] = SelectionController(
            functions, initial=initial_selection, multiple_filters=multiple_filters
        )
        self.default_sort = default_sort
        self.grouped = grouped
        self._on_update = on_update
        self._source: tuple[T, ...] = ()
        self._output: tuple[T, ...] = ()
        self._closed = False
        self._recomputer: Recomputer[T] = Recomputer(
            self._apply, executor=executor, checkpoint_every=checkpoint_every
        )

    @property
    def functions(self) -> tuple[TableFunction[T], ...]:
        return self._controller.functions

    @property
    def selection(self) -> Selection:
        return self._controller.selection

    @property
    def source(self) -> tuple[T, ...]:
        return self._source

    def index_of(self, label: str) -> int:
        return self._controller.index_of(label)

    def set_data(self, items: Iterable[T]) -> "asyncio.Task[bool]":
        """Replace the source collection with a new snapshot."""
        self._source = tuple(items)
        logger.debug("Table data replaced: {} elements", len(self._source))
        return self.update()

    def toggle_filter(self, index: int) -> "asyncio.Task[bool]":
        self._controller.toggle_filter(index)
        return self.update()

    def select_sort(self, index: int | None) -> "asyncio.Task[bool]":
        self._controller.select_sort(index)
        return self.update()

    def set_selection(self, indices: Iterable[int]) -> "asyncio.Task[bool]":
        self._controller.set_selection(indices)
        return self.update()

    def update(self) -> "asyncio.Task[bool]":
        """Recompute the output from the current data and selection."""
        if self._closed:
            msg = "FilterTable has been closed"
            raise RuntimeError(msg)
        return self._recomputer.submit(
            self._source,
            self._controller.functions,
            self._controller.selection,
            default_sort=self.default_sort,
            grouped=self.grouped,
        )

    async def settled(self) -> tuple[T, ...]:
        """Wait for outstanding recomputes and return the output."""
        await self._recomputer.drain()
        return self._output

    def filtered_output(self) -> tuple[T, ...]:
        return self._output

    def item_at(self, index: int) -> T | None:
        """Return the displayed element at ``index``, or None if there is none."""
        if 0 <= index < len(self._output):
            return self._output[index]
        return None

    def __len__(self) -> int:
        return len(self._output)

    def close(self) -> None:
        """Stop delivering; in-flight work is discarded."""
        self._closed = True
        self._recomputer.cancel()

    def _apply(self, output: list[T]) -> None:
        if self._closed:
            return
        self._output = tuple(output)
        if self._on_update is not None:
            self._on_update(self._output)

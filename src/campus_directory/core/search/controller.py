"""Run keyword searches off the event loop and hand results to a view."""

import asyncio
import weakref
from collections.abc import Callable, Iterable
from concurrent.futures import Executor

from loguru import logger

from campus_directory.core.generation import Generation
from campus_directory.core.search.searcher import search
from campus_directory.models.items import Placemark
from campus_directory.protocols import Searchable, SearchResultsConsumer


class SearchController:
    """Keyword search for a results view that may go away at any time.

    The view is held weakly and resolved only when results arrive. A search
    whose results arrive after a newer search, a ``clear`` or ``close`` is
    dropped without touching the view.
    """

    def __init__(
        self,
        consumer: SearchResultsConsumer,
        corpus: Callable[[], Iterable[Searchable]],
        *,
        executor: Executor | None = None,
    ) -> None:
        self._consumer_ref = weakref.ref(consumer)
        self._corpus = corpus
        self._executor = executor
        self._generation = Generation()
        self._closed = False
        self._pending: set[asyncio.Task[bool]] = set()

    def search(self, keyword: str) -> "asyncio.Task[bool]":
        """Start a search; the task resolves True if results were shown."""
        loop = asyncio.get_running_loop()
        token = self._generation.issue()
        snapshot = tuple(self._corpus())
        logger.debug("Search #{} issued for {!r} over {} items", token, keyword, len(snapshot))

        future = loop.run_in_executor(self._executor, search, keyword, snapshot)
        task = loop.create_task(self._deliver_when_done(token, future))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _deliver_when_done(
        self, token: int, future: "asyncio.Future[list[Placemark]]"
    ) -> bool:
        try:
            placemarks = await future
        except Exception:
            logger.exception("Search #{} failed", token)
            return False
        return self._deliver(token, placemarks)

    def _deliver(self, token: int, placemarks: list[Placemark]) -> bool:
        if self._closed or not self._generation.is_current(token):
            logger.debug("Search #{} superseded, dropped", token)
            return False
        consumer = self._consumer_ref()
        if consumer is None:
            logger.debug("Search #{} finished after its view went away", token)
            return False
        consumer.show_placemarks(placemarks)
        return True

    def clear(self) -> bool:
        """Show an empty result list and drop any search still running."""
        return self._deliver(self._generation.issue(), [])

    def close(self) -> None:
        """Detach from the view; nothing is delivered after this."""
        self._closed = True
        self._generation.invalidate()

    async def drain(self) -> None:
        while self._pending:
            await asyncio.gather(*list(self._pending))

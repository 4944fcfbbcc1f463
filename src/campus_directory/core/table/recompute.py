"""Run filter/sort evaluations off the event loop, delivering only the latest."""

import asyncio
from collections.abc import Callable, Sequence
from concurrent.futures import Executor
from typing import Generic, TypeVar

from loguru import logger

from campus_directory.config import CHECKPOINT_INTERVAL
from campus_directory.core.generation import Generation
from campus_directory.core.table.engine import EvaluationCancelled, evaluate
from campus_directory.core.table.functions import Comparator, Selection, TableFunction

T = TypeVar("T")


class Recomputer(Generic[T]):
    """Cancel-and-replace wrapper around ``evaluate``.

    ``submit`` must be called from the running event loop. Each call issues a
    new generation token; the worker checks it at coarse checkpoints and the
    result is handed to ``deliver`` on the loop only if no newer request was
    issued in the meantime.
    """

    def __init__(
        self,
        deliver: Callable[[list[T]], None],
        *,
        executor: Executor | None = None,
        checkpoint_every: int = CHECKPOINT_INTERVAL,
    ) -> None:
        self._deliver = deliver
        self._executor = executor
        self._checkpoint_every = checkpoint_every
        self._generation = Generation()
        self._pending: set[asyncio.Task[bool]] = set()

    @property
    def generation(self) -> int:
        return self._generation.current

    def submit(
        self,
        source: Sequence[T],
        functions: Sequence[TableFunction[T]],
        selection: Selection,
        *,
        default_sort: Comparator[T],
        grouped: bool = False,
    ) -> "asyncio.Task[bool]":
        """Start evaluating a snapshot; the task resolves True if it was delivered."""
        loop = asyncio.get_running_loop()
        token = self._generation.issue()
        snapshot = tuple(source)
        every = 1 if grouped else self._checkpoint_every
        logger.debug(
            "Recompute #{} issued: {} elements, selection {}", token, len(snapshot), selection
        )

        def checkpoint() -> None:
            if not self._generation.is_current(token):
                raise EvaluationCancelled(token)

        def work() -> list[T]:
            return evaluate(
                snapshot,
                functions,
                selection,
                default_sort=default_sort,
                checkpoint=checkpoint,
                checkpoint_every=every,
            )

        future = loop.run_in_executor(self._executor, work)
        task = loop.create_task(self._deliver_when_done(token, future))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _deliver_when_done(self, token: int, future: "asyncio.Future[list[T]]") -> bool:
        try:
            result = await future
        except EvaluationCancelled:
            logger.debug("Recompute #{} cancelled at a checkpoint", token)
            return False
        except Exception:
            logger.exception("Recompute #{} failed", token)
            return False

        if not self._generation.is_current(token):
            logger.debug("Recompute #{} finished after being superseded, dropped", token)
            return False

        self._deliver(result)
        logger.debug("Recompute #{} delivered {} elements", token, len(result))
        return True

    def cancel(self) -> None:
        """Invalidate every outstanding request."""
        self._generation.invalidate()

    async def drain(self) -> None:
        """Wait until every outstanding request has resolved."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

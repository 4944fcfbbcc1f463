"""Evaluate a selection of filters and sorts against a collection."""

from collections.abc import Callable, Sequence
from functools import cmp_to_key
from typing import TypeVar

from campus_directory.core.table.functions import (
    Comparator,
    Filter,
    Selection,
    Sort,
    TableFunction,
)

T = TypeVar("T")


class EvaluationCancelled(Exception):
    """Raised by a checkpoint when the computation has been superseded."""


def satisfies_any(predicates: Sequence[Callable[[T], bool]], element: T) -> bool:
    """True if no predicates are given, or the element passes at least one."""
    if not predicates:
        return True
    return any(p(element) for p in predicates)


def evaluate(
    source: Sequence[T],
    functions: Sequence[TableFunction[T]],
    selection: Selection,
    *,
    default_sort: Comparator[T],
    checkpoint: Callable[[], None] | None = None,
    checkpoint_every: int = 1,
) -> list[T]:
    """Filter then sort ``source`` according to ``selection``.

    Elements may be items or groups of items; a group is tested and kept as
    a single element. The result depends only on the inputs, and the sort is
    stable so ties keep their filtered order.

    Args:
        source: Elements to evaluate, in display order.
        functions: The table functions the selection indexes into.
        selection: Selected filters and sort.
        default_sort: Comparator used when no sort is selected.
        checkpoint: Called periodically; raises EvaluationCancelled to stop.
        checkpoint_every: Elements between checkpoint calls.

    Returns:
        The surviving elements, ordered.
    """
    filters: list[Filter[T]] = []
    for index in sorted(selection.filters):
        function = functions[index]
        if not isinstance(function, Filter):
            msg = f"Selected index {index} ({function.label!r}) is not a filter"
            raise ValueError(msg)
        filters.append(function)

    compare = default_sort
    if selection.sort is not None:
        sort = functions[selection.sort]
        if not isinstance(sort, Sort):
            msg = f"Selected index {selection.sort} ({sort.label!r}) is not a sort"
            raise ValueError(msg)
        compare = sort.compare

    predicates = [f.bind() for f in filters]
    every = max(1, checkpoint_every)
    kept: list[T] = []
    for position, element in enumerate(source):
        if checkpoint is not None and position % every == 0:
            checkpoint()
        if satisfies_any(predicates, element):
            kept.append(element)

    if checkpoint is not None:
        checkpoint()
    ordered = sorted(kept, key=cmp_to_key(compare))
    if checkpoint is not None:
        checkpoint()
    return ordered

"""Named filters and sorts that can be attached to a displayed collection."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

Comparator = Callable[[T, T], int]


@dataclass(frozen=True)
class Filter(Generic[T]):
    """A toggleable predicate. Any number of filters may be selected."""

    label: str
    predicate: Callable[[T], bool] = field(compare=False)
    prepare: Callable[[], Callable[[T], bool]] | None = field(default=None, compare=False)

    def bind(self) -> Callable[[T], bool]:
        """Predicate for one evaluation.

        Filters built with ``prepare`` fix their inputs (such as the current
        time) here, so every element of one evaluation sees the same values.
        """
        if self.prepare is None:
            return self.predicate
        return self.prepare()

    @classmethod
    def for_representative(cls, label: str, predicate: Callable[[U], bool]) -> "Filter[Any]":
        """Lift an item predicate to one over groups.

        The predicate sees the group's first member. Empty groups never pass.
        """

        def group_predicate(group: Any) -> bool:
            representative = group.representative
            if representative is None:
                return False
            return predicate(representative)

        return cls(label, group_predicate)


@dataclass(frozen=True)
class Sort(Generic[T]):
    """A comparator. At most one sort is selected at a time."""

    label: str
    compare: Callable[[T, T], int] = field(compare=False)


TableFunction = Filter[T] | Sort[T]


def compare_alphabetical(a: Any, b: Any) -> int:
    """Order items by display name."""
    return (a.display_name > b.display_name) - (a.display_name < b.display_name)


def keep_order(_a: Any, _b: Any) -> int:
    """Treat everything as equal so a stable sort keeps the input order."""
    return 0


@dataclass(frozen=True)
class Selection:
    """Immutable snapshot of which table functions are selected."""

    filters: frozenset[int] = frozenset()
    sort: int | None = None

    @property
    def indices(self) -> frozenset[int]:
        if self.sort is None:
            return self.filters
        return self.filters | {self.sort}

    def is_selected(self, index: int) -> bool:
        return index in self.indices


def _check_index(functions: Sequence[object], index: int) -> None:
    if not 0 <= index < len(functions):
        msg = f"Table function index {index} out of range (0..{len(functions) - 1})"
        raise IndexError(msg)


def build_selection(functions: Sequence[TableFunction[T]], indices: Iterable[int]) -> Selection:
    """Validate raw indices and split them into filters and a sort."""
    filters: set[int] = set()
    sorts: set[int] = set()
    for index in indices:
        _check_index(functions, index)
        if isinstance(functions[index], Sort):
            sorts.add(index)
        else:
            filters.add(index)
    if len(sorts) > 1:
        msg = f"At most one sort may be selected, got indices {sorted(sorts)!r}"
        raise ValueError(msg)
    return Selection(filters=frozenset(filters), sort=next(iter(sorts), None))


class SelectionController(Generic[T]):
    """Owns the selection for a list of table functions.

    Sorts are mutually exclusive. Filters are independent, unless
    ``multiple_filters`` is False, in which case selecting one filter
    deselects the others.
    """

    def __init__(
        self,
        functions: Sequence[TableFunction[T]],
        *,
        initial: Iterable[int] = (),
        multiple_filters: bool = True,
    ) -> None:
        self.functions: tuple[TableFunction[T], ...] = tuple(functions)
        self.multiple_filters = multiple_filters
        self._selection = build_selection(self.functions, initial)
        if not multiple_filters and len(self._selection.filters) > 1:
            msg = "Only one filter may be selected in single-choice mode"
            raise ValueError(msg)

    @property
    def selection(self) -> Selection:
        return self._selection

    def selected_filters(self) -> list[Filter[T]]:
        return [self.functions[i] for i in sorted(self._selection.filters)]  # type: ignore[misc]

    def selected_sort(self) -> Sort[T] | None:
        if self._selection.sort is None:
            return None
        return self.functions[self._selection.sort]  # type: ignore[return-value]

    def toggle_filter(self, index: int) -> Selection:
        _check_index(self.functions, index)
        if not isinstance(self.functions[index], Filter):
            msg = f"Function {index} ({self.functions[index].label!r}) is not a filter"
            raise ValueError(msg)

        current = self._selection.filters
        if index in current:
            filters = current - {index}
        elif self.multiple_filters:
            filters = current | {index}
        else:
            filters = frozenset({index})
        self._selection = Selection(filters=filters, sort=self._selection.sort)
        return self._selection

    def select_sort(self, index: int | None) -> Selection:
        if index is not None:
            _check_index(self.functions, index)
            if not isinstance(self.functions[index], Sort):
                msg = f"Function {index} ({self.functions[index].label!r}) is not a sort"
                raise ValueError(msg)
        self._selection = Selection(filters=self._selection.filters, sort=index)
        return self._selection

    def set_selection(self, indices: Iterable[int]) -> Selection:
        selection = build_selection(self.functions, indices)
        if not self.multiple_filters and len(selection.filters) > 1:
            msg = "Only one filter may be selected in single-choice mode"
            raise ValueError(msg)
        self._selection = selection
        return self._selection

    def index_of(self, label: str) -> int:
        """Return the index of the function with the given label."""
        for i, function in enumerate(self.functions):
            if function.label == label:
                return i
        msg = f"No table function labelled {label!r}"
        raise KeyError(msg)

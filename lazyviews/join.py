"""
``lazyviews.join``
==================

Sort-merge equi-join of two views. Every element of the first view is
looked up by binary search in the second, which must be sorted by its
join key.
"""
import bisect
import typing as ty
import warnings

from lazyviews.base import Category, Cursor, distance, next_cursor
from lazyviews.cursors import SequenceCursor
from lazyviews.view import View, as_view

__all__ = ["JoinWhereCursor", "join_where"]


A = ty.TypeVar("A")
B = ty.TypeVar("B")
R = ty.TypeVar("R")
Key = ty.Any


def _lower_bound(
    first: Cursor[B],
    last: Cursor[B],
    key: Key,
    selector: ty.Callable[[B], Key],
) -> Cursor[B]:
    """Returns a cursor at the first element in ``[first, last)`` whose
    selected key is not less than ``key``. Sequence-backed random access
    cursors are searched with ``bisect``; any other cursor is binary
    searched by stepping, which is linear for forward cursors.
    """
    if (
        isinstance(first, SequenceCursor)
        and first.category is Category.RANDOM_ACCESS
    ):
        lo, hi = first.index, ty.cast(SequenceCursor[B], last).index
        found = bisect.bisect_left(first.sequence, key, lo, hi, key=selector)
        return first + (found - lo)
    count = distance(first, last)
    first = first.copy()
    while count > 0:
        step = count // 2
        probe = next_cursor(first, step)
        if selector(probe.deref()) < key:
            probe.increment()
            first = probe
            count = count - (step + 1)
        else:
            count = step
    return first


class JoinWhereCursor(Cursor[R]):
    """Forward cursor over the matched pairs of a sort-merge join.

    :group: Joins

    Parameters
    ----------
    iter_a, end_a : Cursor
        Range of the probing side, in any order.
    iter_b, end_b : Cursor
        Range of the searched side, sorted ascending by ``selector_b``.
    selector_a, selector_b : callable
        Extract the join key from elements of each side.
    result_selector : callable
        Combines a matched pair of elements into the result.

    Notes
    -----
    Each element of A yields at most one result, paired with the first
    element of B holding an equal key at or after the search start. The
    search start moves forward past every match. After a failed search it
    is reset to the beginning of B, and a search which failed from a
    later start is retried once from the beginning.

    Equality only compares the position in A.
    """

    def __init__(
        self,
        iter_a: Cursor[A],
        end_a: Cursor[A],
        iter_b: Cursor[B],
        end_b: Cursor[B],
        selector_a: ty.Callable[[A], Key],
        selector_b: ty.Callable[[B], Key],
        result_selector: ty.Callable[[A, B], R],
    ) -> None:
        self._iter_a = iter_a
        self._end_a = end_a
        self._iter_b = iter_b
        self._begin_b = iter_b.copy()
        self._end_b = end_b
        self._matched_b: ty.Optional[Cursor[B]] = None
        self._selector_a = selector_a
        self._selector_b = selector_b
        self._result_selector = result_selector
        if self._iter_a == self._end_a:
            return
        if self._iter_b == self._end_b:
            self._iter_a = end_a.copy()
            return
        self._find_next()

    def _find_next(self) -> None:
        while self._iter_a != self._end_a:
            key = self._selector_a(self._iter_a.deref())
            from_begin = self._iter_b == self._begin_b
            self._iter_b = _lower_bound(
                self._iter_b, self._end_b, key, self._selector_b
            )
            if self._iter_b != self._end_b and not (
                key < self._selector_b(self._iter_b.deref())
            ):
                self._matched_b = self._iter_b.copy()
                self._iter_b.increment()
                return
            self._iter_b = self._begin_b.copy()
            if from_begin:
                self._iter_a.increment()

    def deref(self) -> R:
        assert self._matched_b is not None, "dereferenced end"
        return self._result_selector(
            self._iter_a.deref(), self._matched_b.deref()
        )

    def increment(self) -> None:
        assert self._iter_a != self._end_a, "incremented end"
        self._iter_a.increment()
        self._find_next()

    def equals(self, other: Cursor[ty.Any]) -> bool:
        return self._iter_a.equals(other._iter_a)  # type: ignore

    def copy(self) -> "JoinWhereCursor[R]":
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone._iter_a = self._iter_a.copy()
        clone._iter_b = self._iter_b.copy()
        if self._matched_b is not None:
            clone._matched_b = self._matched_b.copy()
        return clone


def _warn_unsorted(view: View[B], selector: ty.Callable[[B], Key]) -> None:
    keys = map(selector, view)
    prev = next(keys, None)
    for idx, key in enumerate(keys, start=1):
        if key < prev:
            warnings.warn(
                f"Second sequence of join_where() is not sorted by its key "
                f"selector (element {idx}). Some matches will be missing.",
                UserWarning,
                stacklevel=3,
            )
            return
        prev = key


def join_where(
    a: ty.Iterable[A],
    b: ty.Iterable[B],
    selector_a: ty.Callable[[A], Key],
    selector_b: ty.Callable[[B], Key],
    result_selector: ty.Callable[[A, B], R],
    check_sorted: bool = False,
) -> View[R]:
    """Returns a forward view joining ``a`` and ``b`` on equal keys.

    :group: Joins

    Parameters
    ----------
    a : Iterable
        Probing side, in any order.
    b : Iterable
        Searched side. Must be sorted ascending by ``selector_b``.
    selector_a, selector_b : callable
        Key extractors for elements of ``a`` and ``b``. Keys are
        compared with ``<`` only.
    result_selector : callable
        Called as ``result_selector(elem_a, elem_b)`` for each match.
    check_sorted : bool
        If ``True``, ``b`` is scanned once when the view is built, and a
        ``UserWarning`` is emitted if it is not sorted. Default is
        ``False``.

    Returns
    -------
    view : View
        Forward view of the results, in the order of ``a``.

    Notes
    -----
    Sorting of ``b`` is a precondition, not a checked error: an unsorted
    ``b`` silently produces an incomplete result.

    Each search costs O(log |B|) comparisons when ``b`` is a sequence.
    Searches which fail restart from the beginning of ``b``, so when
    keys of ``a`` do not follow the order of ``b``, or ``b`` is a
    forward-only iterable, the join degrades towards O(|A| |B|).

    Examples
    --------
    >>> join_where([1, 3, 5], [1, 2, 3, 4, 5], int, int, lambda x, y: (x, y)).to_list()
    [(1, 1), (3, 3), (5, 5)]
    """
    view_a = as_view(a)
    view_b = as_view(b)
    if check_sorted:
        _warn_unsorted(view_b, selector_b)
    end_a, end_b = view_a.end(), view_b.end()
    begin = JoinWhereCursor(
        view_a.begin(),
        end_a,
        view_b.begin(),
        end_b,
        selector_a,
        selector_b,
        result_selector,
    )
    end = JoinWhereCursor(
        end_a.copy(),
        end_a,
        end_b.copy(),
        end_b,
        selector_a,
        selector_b,
        result_selector,
    )
    return View(begin, end)

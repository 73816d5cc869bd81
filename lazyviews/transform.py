"""
``lazyviews.transform``
=======================

One-hop adaptors over a single view: pairing elements with a counter,
mapping a function over them, and dropping elements found in a second
view.
"""
import typing as ty

from lazyviews.base import Category, Cursor
from lazyviews.view import View, as_view

__all__ = [
    "EnumerateCursor",
    "MapCursor",
    "ExceptCursor",
    "enumerated",
    "mapped",
    "excluding",
]


T = ty.TypeVar("T")
U = ty.TypeVar("U")


class EnumerateCursor(Cursor[ty.Tuple[int, T]]):
    """Wraps a cursor, pairing its elements with a running index.

    :group: Transforms
    """

    def __init__(self, cursor: Cursor[T], index: int) -> None:
        self._cursor = cursor
        self._index = index

    @property
    def category(self) -> Category:
        return self._cursor.category

    def deref(self) -> ty.Tuple[int, T]:
        return self._index, self._cursor.deref()

    def increment(self) -> None:
        self._cursor.increment()
        self._index = self._index + 1

    def decrement(self) -> None:
        self._cursor.decrement()
        self._index = self._index - 1

    def advance(self, offset: int) -> None:
        self._cursor.advance(offset)
        self._index = self._index + offset

    def difference(self, other: Cursor[ty.Any]) -> int:
        return self._cursor.difference(other._cursor)  # type: ignore

    def steps_from(self, other: Cursor[ty.Any]) -> int:
        return self._cursor.steps_from(other._cursor)  # type: ignore

    def equals(self, other: Cursor[ty.Any]) -> bool:
        return self._cursor.equals(other._cursor)  # type: ignore

    def copy(self) -> "EnumerateCursor[T]":
        return self.__class__(self._cursor.copy(), self._index)


class MapCursor(Cursor[U]):
    """Wraps a cursor, applying ``func`` to each dereferenced element.

    :group: Transforms
    """

    def __init__(self, cursor: Cursor[T], func: ty.Callable[[T], U]) -> None:
        self._cursor = cursor
        self._func = func

    @property
    def category(self) -> Category:
        return self._cursor.category

    def deref(self) -> U:
        return self._func(self._cursor.deref())

    def increment(self) -> None:
        self._cursor.increment()

    def decrement(self) -> None:
        self._cursor.decrement()

    def advance(self, offset: int) -> None:
        self._cursor.advance(offset)

    def difference(self, other: Cursor[ty.Any]) -> int:
        return self._cursor.difference(other._cursor)  # type: ignore

    def steps_from(self, other: Cursor[ty.Any]) -> int:
        return self._cursor.steps_from(other._cursor)  # type: ignore

    def equals(self, other: Cursor[ty.Any]) -> bool:
        return self._cursor.equals(other._cursor)  # type: ignore

    def copy(self) -> "MapCursor[U]":
        return self.__class__(self._cursor.copy(), self._func)


class ExceptCursor(Cursor[T]):
    """Forward cursor skipping every element equal to one in the
    exclusion view.

    :group: Transforms

    Parameters
    ----------
    cursor, end : Cursor
        Current and end positions of the filtered data.
    exclude : View
        Elements to drop. Scanned linearly for every candidate element.
    find : bool
        Whether to skip excluded elements at construction. End cursors
        are built with ``False``.
    """

    def __init__(
        self,
        cursor: Cursor[T],
        end: Cursor[T],
        exclude: View[ty.Any],
        find: bool = True,
    ) -> None:
        self._cursor = cursor
        self._end = end
        self._exclude = exclude
        if find:
            self._find()

    def _excluded(self, value: T) -> bool:
        return any(value == other for other in self._exclude)

    def _find(self) -> None:
        while self._cursor != self._end and self._excluded(
            self._cursor.deref()
        ):
            self._cursor.increment()

    def deref(self) -> T:
        return self._cursor.deref()

    def increment(self) -> None:
        self._cursor.increment()
        self._find()

    def equals(self, other: Cursor[ty.Any]) -> bool:
        return self._cursor.equals(other._cursor)  # type: ignore

    def copy(self) -> "ExceptCursor[T]":
        return self.__class__(
            self._cursor.copy(), self._end, self._exclude, find=False
        )


def enumerated(iterable: ty.Iterable[T], start: int = 0) -> View[ty.Tuple[int, T]]:
    """Returns a view of ``(index, element)`` pairs.

    :group: Transforms

    Parameters
    ----------
    iterable : Iterable
        Python iterable or view to enumerate.
    start : int
        Index of the first element. Default is 0.

    Returns
    -------
    view : View
        View with the same category as ``iterable``.
    """
    view = as_view(iterable)
    begin, end = view.begin(), view.end()
    if view.category is Category.RANDOM_ACCESS and not view.unbounded:
        stop = start + end.steps_from(begin)
    else:
        # only the wrapped cursors take part in comparisons
        stop = start
    return View(
        EnumerateCursor(begin, start),
        EnumerateCursor(end, stop),
        unbounded=view.unbounded,
    )


def mapped(func: ty.Callable[[T], U], iterable: ty.Iterable[T]) -> View[U]:
    """Returns a view applying ``func`` to every element of
    ``iterable``.

    :group: Transforms
    """
    view = as_view(iterable)
    return View(
        MapCursor(view.begin(), func),
        MapCursor(view.end(), func),
        unbounded=view.unbounded,
    )


def excluding(
    iterable: ty.Iterable[T], to_exclude: ty.Iterable[ty.Any]
) -> View[T]:
    """Returns a forward view of the elements of ``iterable`` not equal
    to any element of ``to_exclude``.

    :group: Transforms

    Parameters
    ----------
    iterable : Iterable
        Data to filter.
    to_exclude : Iterable
        Elements to drop. Single-pass iterables are buffered, so they
        can be scanned once per candidate element.

    Returns
    -------
    view : View
        Forward view, in the order of ``iterable``.

    Notes
    -----
    Finding the first kept element happens when the view is built.
    """
    view = as_view(iterable)
    exclude = as_view(to_exclude)
    end = view.end()
    return View(
        ExceptCursor(view.begin(), end, exclude),
        ExceptCursor(end.copy(), end, exclude, find=False),
        unbounded=view.unbounded,
    )

"""
``lazyviews.product``
=====================

N-ary cartesian product of views. Positions behave like an odometer:
dimension 0 turns fastest, and each time a dimension rolls over its
end it carries into the next one. When every input is random access,
so is the product, with offsets applied by mixed-radix arithmetic over
the lengths of the dimensions.
"""
import math
import typing as ty

from lazyviews.base import Category, Cursor
from lazyviews.view import View, as_view

__all__ = ["CartesianProductCursor", "cartesian_product"]


Cursors = ty.Sequence[Cursor[ty.Any]]


class CartesianProductCursor(Cursor[ty.Tuple[ty.Any, ...]]):
    """Position within the cartesian product of several ranges.

    :group: Products

    Parameters
    ----------
    current : sequence of Cursor
        Position in each dimension, innermost (fastest varying) first.
        The cursors are taken over by the product cursor.
    begin, end : sequence of Cursor
        Bounds of each dimension. They are shared between copies and
        never moved.

    Notes
    -----
    Dimension 0 only reaches its end in the canonical end state, in
    which every dimension is at its end. Any cursor whose dimension 0
    is at its end is forced into that state, so it is the only end
    position.
    """

    def __init__(self, current: Cursors, begin: Cursors, end: Cursors) -> None:
        assert len(begin) > 1, "a product needs at least two dimensions"
        assert len(current) == len(begin) == len(end)
        self._current = list(current)
        self._begin = tuple(begin)
        self._end = tuple(end)
        self._category = min(cursor.category for cursor in self._begin)

    def __repr__(self) -> str:
        name = self.__class__.__name__
        state = "end" if self._at_end() else f"dims={len(self._current)}"
        return f"{name}({state})"

    @property
    def category(self) -> Category:
        return self._category

    @property
    def ndim(self) -> int:
        return len(self._current)

    def _at_end(self) -> bool:
        return self._current[0] == self._end[0]

    def _set_end(self) -> None:
        self._current = [cursor.copy() for cursor in self._end]

    def _check_end(self) -> None:
        if self._at_end():
            self._set_end()

    def deref(self) -> ty.Tuple[ty.Any, ...]:
        assert not self._at_end(), "dereferenced end"
        return tuple(cursor.deref() for cursor in self._current)

    def increment(self) -> None:
        assert not self._at_end(), "incremented end"
        outer = len(self._current) - 1
        for dim, cursor in enumerate(self._current):
            cursor.increment()
            if cursor != self._end[dim]:
                break
            if dim == outer:
                self._set_end()
                return
            self._current[dim] = self._begin[dim].copy()
        self._check_end()

    def decrement(self) -> None:
        self._require(Category.BIDIRECTIONAL, "decrement")
        if self._at_end():
            for cursor in self._current:
                cursor.decrement()
            return
        outer = len(self._current) - 1
        for dim, cursor in enumerate(self._current):
            if cursor != self._begin[dim]:
                cursor.decrement()
                return
            assert dim != outer, "decremented begin"
            last = self._end[dim].copy()
            last.decrement()
            self._current[dim] = last

    def _lengths(self) -> ty.List[int]:
        return [end.steps_from(begin) for begin, end in zip(self._begin, self._end)]

    def advance(self, offset: int) -> None:
        self._require(Category.RANDOM_ACCESS, "advance")
        if offset == 0:
            return
        lengths = self._lengths()
        assert all(lengths), "advanced within an empty product"
        carry = offset
        if self._at_end():
            # the end state reads as one full turn of the outermost digit
            self._current = [cursor.copy() for cursor in self._begin]
            carry = carry + math.prod(lengths)
        for dim, length in enumerate(lengths):
            digit = self._current[dim].steps_from(self._begin[dim]) + carry
            carry, digit = divmod(digit, length)
            self._current[dim] = self._begin[dim] + digit
        assert carry in (0, 1), "advanced out of range"
        if carry == 1:
            assert all(
                cursor == begin
                for cursor, begin in zip(self._current, self._begin)
            ), "advanced past end"
            self._set_end()
            return
        self._check_end()

    def difference(self, other: Cursor[ty.Any]) -> int:
        self._require(Category.RANDOM_ACCESS, "difference")
        dists = (
            cursor.difference(theirs)
            for cursor, theirs in zip(self._current, other._current)  # type: ignore
        )
        return math.prod(dists, start=1)

    def ordinal(self) -> int:
        """Flat index of the position in iteration order. The end state
        has the ordinal ``len`` of the product.
        """
        self._require(Category.RANDOM_ACCESS, "ordinal")
        lengths = self._lengths()
        if self._at_end():
            return math.prod(lengths)
        index = 0
        stride = 1
        for dim, length in enumerate(lengths):
            index = index + self._current[dim].steps_from(self._begin[dim]) * stride
            stride = stride * length
        return index

    def steps_from(self, other: Cursor[ty.Any]) -> int:
        return self.ordinal() - other.ordinal()  # type: ignore

    def equals(self, other: Cursor[ty.Any]) -> bool:
        return all(
            cursor.equals(theirs)
            for cursor, theirs in zip(self._current, other._current)  # type: ignore
        )

    def copy(self) -> "CartesianProductCursor":
        current = [cursor.copy() for cursor in self._current]
        return self.__class__(current, self._begin, self._end)


def cartesian_product(*iterables: ty.Iterable[ty.Any]) -> View[ty.Tuple[ty.Any, ...]]:
    """Returns a view of every combination of elements of the inputs.

    :group: Products

    Parameters
    ----------
    *iterables : Iterable
        Two or more Python iterables or views. The first one varies
        fastest.

    Returns
    -------
    view : View
        View of tuples holding one element of each input, in the order
        the inputs were given. Its category is the weakest category of
        the inputs.

    Raises
    ------
    ValueError
        If fewer than two inputs are passed.

    Notes
    -----
    If any input is empty, the view is empty, and no element of the
    other inputs is read.

    For random access inputs, ``len()`` of the view is the product of
    the input lengths, and ``view[i]`` jumps straight to the i-th
    combination.

    Examples
    --------
    >>> cartesian_product([1, 2], "abc").to_list()
    [(1, 'a'), (2, 'a'), (1, 'b'), (2, 'b'), (1, 'c'), (2, 'c')]
    """
    if len(iterables) < 2:
        raise ValueError(
            f"cartesian_product() needs at least two inputs, got {len(iterables)}."
        )
    views = [as_view(iterable) for iterable in iterables]
    begins = tuple(view.begin() for view in views)
    ends = tuple(view.end() for view in views)
    if any(begin == end for begin, end in zip(begins, ends)):
        current = [end.copy() for end in ends]
    else:
        current = [begin.copy() for begin in begins]
    return View(
        CartesianProductCursor(current, begins, ends),
        CartesianProductCursor([end.copy() for end in ends], begins, ends),
        unbounded=any(view.unbounded for view in views),
    )

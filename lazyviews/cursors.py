"""
``lazyviews.cursors``
=====================

Leaf cursors over plain Python data. Sequences (lists, tuples, ranges,
strings, NumPy arrays) get random access cursors; any other iterable is
read lazily through a shared buffer, giving multi-pass forward cursors
over single-pass iterators.
"""
import typing as ty
from collections.abc import Sequence

import numpy as np

from lazyviews.base import Category, Cursor

__all__ = ["SequenceCursor", "IterableCursor", "cursors_from"]


T = ty.TypeVar("T")


class SequenceCursor(Cursor[T]):
    """Index into a sequence.

    :group: Cursors

    Parameters
    ----------
    sequence : Sequence
        The indexable data. It is referenced, not copied.
    index : int
        Position within ``sequence``. ``len(sequence)`` is the end.
    category : Category
        Caps the capabilities of the cursor. Default is
        ``RANDOM_ACCESS``.
    """

    __slots__ = ("_sequence", "_index", "_category")

    def __init__(
        self,
        sequence: ty.Sequence[T],
        index: int = 0,
        category: Category = Category.RANDOM_ACCESS,
    ) -> None:
        self._sequence = sequence
        self._index = index
        self._category = Category(category)

    def __repr__(self) -> str:
        return f"SequenceCursor(index={self._index})"

    @property
    def category(self) -> Category:
        return self._category

    @property
    def index(self) -> int:
        return self._index

    @property
    def sequence(self) -> ty.Sequence[T]:
        return self._sequence

    def deref(self) -> T:
        assert 0 <= self._index < len(self._sequence), "dereferenced end"
        return self._sequence[self._index]

    def increment(self) -> None:
        self._index = self._index + 1

    def decrement(self) -> None:
        self._require(Category.BIDIRECTIONAL, "decrement")
        assert self._index > 0, "decremented begin"
        self._index = self._index - 1

    def advance(self, offset: int) -> None:
        self._require(Category.RANDOM_ACCESS, "advance")
        self._index = self._index + offset

    def difference(self, other: Cursor[ty.Any]) -> int:
        self._require(Category.RANDOM_ACCESS, "difference")
        return self._index - other._index  # type: ignore

    def equals(self, other: Cursor[ty.Any]) -> bool:
        return self._index == other._index  # type: ignore

    def copy(self) -> "SequenceCursor[T]":
        return self.__class__(self._sequence, self._index, self._category)


class _Link:
    """Buffered element of a single-pass iterator. The successor is
    pulled from the iterator the first time it is requested, and the
    iterator is handed on to it.
    """

    __slots__ = ("value", "_next", "_source")

    def __init__(self, value: ty.Any, source: ty.Optional[ty.Iterator[ty.Any]]):
        self.value = value
        self._next: ty.Optional[_Link] = None
        self._source = source

    @property
    def next(self) -> ty.Optional["_Link"]:
        if self._source is not None:
            source, self._source = self._source, None
            try:
                value = next(source)
            except StopIteration:
                pass
            else:
                self._next = _Link(value, source)
        return self._next


class IterableCursor(Cursor[T]):
    """Forward cursor over any iterable.

    :group: Cursors

    The iterator is consumed lazily, one element per new position
    reached by any copy of the cursor. Copies share the buffered
    elements, so several positions may be held at once; elements behind
    the oldest live copy are released.

    Notes
    -----
    The cursor points at the link *before* its element. The end
    sentinel, built with ``IterableCursor.end()``, holds no link at all.
    """

    __slots__ = ("_link",)

    def __init__(self, iterable: ty.Optional[ty.Iterable[T]] = None) -> None:
        self._link: ty.Optional[_Link] = None
        if iterable is not None:
            self._link = _Link(None, iter(iterable))

    def __repr__(self) -> str:
        return "IterableCursor(end)" if self._at_end() else "IterableCursor()"

    @classmethod
    def end(cls) -> "IterableCursor[ty.Any]":
        """The end sentinel, equal to any exhausted cursor."""
        return cls()

    def _node(self) -> ty.Optional[_Link]:
        if self._link is None:
            return None
        return self._link.next

    def _at_end(self) -> bool:
        return self._node() is None

    def deref(self) -> T:
        node = self._node()
        assert node is not None, "dereferenced end"
        return node.value

    def increment(self) -> None:
        assert not self._at_end(), "incremented end"
        self._link = self._link.next  # type: ignore

    def equals(self, other: Cursor[ty.Any]) -> bool:
        return self._node() is other._node()  # type: ignore

    def copy(self) -> "IterableCursor[T]":
        clone = self.__class__()
        clone._link = self._link
        return clone


def _is_sequence(iterable: ty.Any) -> bool:
    return isinstance(iterable, (Sequence, np.ndarray))


def cursors_from(
    iterable: ty.Iterable[T], category: ty.Optional[Category] = None
) -> ty.Tuple[Cursor[T], Cursor[T]]:
    """Builds a ``(begin, end)`` cursor pair over a Python iterable.

    :group: Cursors

    Parameters
    ----------
    iterable : Iterable
        Sequences get ``SequenceCursor`` pairs, any other iterable gets
        ``IterableCursor`` pairs.
    category : Category, optional
        Upper bound on the category of the returned cursors.

    Returns
    -------
    begin, end : Cursor
        Cursors at the first element and one past the last element.
    """
    if _is_sequence(iterable):
        cap = Category.RANDOM_ACCESS if category is None else category
        seq = ty.cast(ty.Sequence[T], iterable)
        return SequenceCursor(seq, 0, cap), SequenceCursor(seq, len(seq), cap)
    return IterableCursor(iterable), IterableCursor.end()

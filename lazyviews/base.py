"""
``lazyviews.base``
==================

Abstract cursor interface shared by every adaptor in the package. A
cursor is a movable position into a lazy sequence; adaptors wrap one or
more cursors and expose a new one, so they can be chained uniformly.
"""
import enum
import typing as ty
from abc import ABC, abstractmethod

__all__ = [
    "Category",
    "CategoryError",
    "Cursor",
    "distance",
    "next_cursor",
]


T = ty.TypeVar("T")
C = ty.TypeVar("C", bound="Cursor")


class Category(enum.IntEnum):
    """Traversal capability tiers, ordered from weakest to strongest.

    :group: Cursors

    Notes
    -----
    The category of an adaptor over several inputs is the ``min()`` of
    the inputs' categories.
    """

    FORWARD = 1
    BIDIRECTIONAL = 2
    RANDOM_ACCESS = 3


class CategoryError(TypeError):
    """Raised when an operation needs a stronger traversal category than
    the cursor or view provides.

    :group: Cursors
    """


class Cursor(ABC, ty.Generic[T]):
    """Position into a lazy sequence.

    :group: Cursors

    Subclasses implement ``deref``, ``increment``, ``equals`` and
    ``copy``. Bidirectional cursors also override ``decrement``, and
    random access cursors override ``advance`` and ``difference``. The
    base implementations of the optional operations raise
    ``CategoryError``.

    Notes
    -----
    Dereferencing or incrementing an end cursor, decrementing a begin
    cursor, and comparing cursors from different views are programming
    errors. They are only checked by assertions.
    """

    __hash__ = None  # type: ignore

    @property
    def category(self) -> Category:
        return Category.FORWARD

    @abstractmethod
    def deref(self) -> T:
        """Returns the element at the current position."""

    @abstractmethod
    def increment(self) -> None:
        """Moves one step forward."""

    @abstractmethod
    def equals(self, other: "Cursor[ty.Any]") -> bool:
        """Whether both cursors denote the same position."""

    @abstractmethod
    def copy(self: C) -> C:
        """Returns an independent cursor at the same position."""

    def decrement(self) -> None:
        """Moves one step backward."""
        raise self._category_error(Category.BIDIRECTIONAL, "decrement")

    def advance(self, offset: int) -> None:
        """Moves ``offset`` steps, which may be negative."""
        raise self._category_error(Category.RANDOM_ACCESS, "advance")

    def difference(self, other: "Cursor[ty.Any]") -> int:
        """Signed number of steps from ``other`` to ``self``."""
        raise self._category_error(Category.RANDOM_ACCESS, "difference")

    def steps_from(self, other: "Cursor[ty.Any]") -> int:
        """Signed number of increments from ``other`` to ``self``. Equal
        to ``difference`` unless a cursor defines its difference some
        other way. Ordering and ``distance`` rely on this count.
        """
        return self.difference(other)

    def _category_error(self, needed: Category, operation: str) -> CategoryError:
        name = self.__class__.__name__
        return CategoryError(
            f"{name}.{operation}() requires a {needed.name} cursor, "
            f"but this cursor is {self.category.name}."
        )

    def _require(self, needed: Category, operation: str) -> None:
        if self.category < needed:
            raise self._category_error(needed, operation)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return not self.equals(other)

    def __add__(self: C, offset: int) -> C:
        if not isinstance(offset, int):
            return NotImplemented
        moved = self.copy()
        moved.advance(offset)
        return moved

    def __sub__(self, other):
        if isinstance(other, int):
            return self + (-other)
        if isinstance(other, Cursor):
            return self.difference(other)
        return NotImplemented

    def __lt__(self, other: "Cursor[ty.Any]") -> bool:
        return self.steps_from(other) < 0

    def __le__(self, other: "Cursor[ty.Any]") -> bool:
        return self.steps_from(other) <= 0

    def __gt__(self, other: "Cursor[ty.Any]") -> bool:
        return self.steps_from(other) > 0

    def __ge__(self, other: "Cursor[ty.Any]") -> bool:
        return self.steps_from(other) >= 0


def distance(first: Cursor[ty.Any], last: Cursor[ty.Any]) -> int:
    """Number of steps from ``first`` to ``last``. Counts increments
    unless both cursors are random access.

    :group: Cursors
    """
    if first.category >= Category.RANDOM_ACCESS:
        return last.steps_from(first)
    count = 0
    probe = first.copy()
    while probe != last:
        probe.increment()
        count = count + 1
    return count


def next_cursor(cursor: C, steps: int = 1) -> C:
    """Returns a copy of ``cursor`` moved forward by ``steps``, using
    ``advance`` when the cursor is random access.

    :group: Cursors
    """
    moved = cursor.copy()
    if moved.category >= Category.RANDOM_ACCESS:
        moved.advance(steps)
    elif steps < 0:
        for _ in range(-steps):
            moved.decrement()
    else:
        for _ in range(steps):
            moved.increment()
    return moved

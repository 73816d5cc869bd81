"""
``lazyviews.view``
==================

Container-like facade over a pair of cursors. Views own no data, only
their begin and end positions, and are consumed by iterating over them
or by materialising them into eager containers.
"""
import typing as ty

import numpy as np
import numpy.typing as npt
from rich.console import Console
from rich.tree import Tree

from lazyviews.base import Category, CategoryError, Cursor
from lazyviews.cursors import cursors_from

__all__ = ["View", "as_view"]


T = ty.TypeVar("T")
K = ty.TypeVar("K")
V = ty.TypeVar("V")


class View(ty.Generic[T]):
    """Lazy sequence between two cursors.

    :group: Views

    Parameters
    ----------
    begin : Cursor
        Position of the first element.
    end : Cursor
        Position one past the last element.
    unbounded : bool
        Whether the view never reaches ``end`` by iteration. Default is
        ``False``.

    Raises
    ------
    CategoryError
        If the length or an element by index is requested from a view
        that is not random access, or the length of an unbounded view.
    ValueError
        If an unbounded view is materialised.

    Notes
    -----
    Every call to ``iter()`` walks a fresh copy of the begin cursor, so
    views may be iterated any number of times. The cursors returned by
    ``begin()`` and ``end()`` are copies too, and moving them leaves the
    view untouched.
    """

    def __init__(
        self, begin: Cursor[T], end: Cursor[T], unbounded: bool = False
    ) -> None:
        self._begin = begin
        self._end = end
        self._unbounded = unbounded

    def __rich__(self) -> Tree:
        name = self.__class__.__name__
        category = self.category.name
        tree = Tree(f"{name}(category=[yellow]{category}[default])")
        tree.add(f"[blue]cursor [default]= [green]{type(self._begin).__name__}")
        if self._unbounded:
            tree.add("[blue]unbounded [default]= [green]True")
        elif self.category is Category.RANDOM_ACCESS:
            tree.add(f"[blue]len [default]= [green]{len(self)}")
        return tree

    def __repr__(self) -> str:
        console = Console(color_system=None)
        with console.capture() as capture:
            console.print(self)
        return capture.get()

    @property
    def category(self) -> Category:
        """Traversal category of the view's cursors."""
        return self._begin.category

    @property
    def unbounded(self) -> bool:
        return self._unbounded

    def begin(self) -> Cursor[T]:
        """Copy of the cursor at the first element."""
        return self._begin.copy()

    def end(self) -> Cursor[T]:
        """Copy of the cursor one past the last element."""
        return self._end.copy()

    def __iter__(self) -> ty.Iterator[T]:
        cursor = self._begin.copy()
        end = self._end
        while cursor != end:
            yield cursor.deref()
            cursor.increment()

    def __len__(self) -> int:
        if self._unbounded:
            raise CategoryError("Length of an unbounded view is undefined.")
        if self.category < Category.RANDOM_ACCESS:
            raise CategoryError(
                "Length only defined for RANDOM_ACCESS views, "
                f"this view is {self.category.name}."
            )
        return self._end.steps_from(self._begin)

    def __bool__(self) -> bool:
        return self._begin != self._end

    def __getitem__(self, index: int) -> T:
        if not isinstance(index, (int, np.integer)):
            raise TypeError(
                f"View indices must be integers, not {type(index).__name__}."
            )
        if self.category < Category.RANDOM_ACCESS:
            raise CategoryError(
                "Indexing only defined for RANDOM_ACCESS views, "
                f"this view is {self.category.name}."
            )
        size = len(self)
        if index < 0:
            index = index + size
        if not 0 <= index < size:
            raise IndexError("View index out of range.")
        return (self._begin + int(index)).deref()

    def _check_bounded(self) -> None:
        if self._unbounded:
            raise ValueError(
                "Cannot materialise an unbounded view. Bound it first, "
                "eg. with itertools.islice()."
            )

    def to_list(self) -> ty.List[T]:
        """Collects the elements into a list."""
        self._check_bounded()
        return list(self)

    def to_tuple(self) -> ty.Tuple[T, ...]:
        """Collects the elements into a tuple."""
        self._check_bounded()
        return tuple(self)

    def to_set(self) -> ty.Set[T]:
        """Collects the elements into a set."""
        self._check_bounded()
        return set(self)

    def to_dict(
        self,
        key: ty.Callable[[T], K],
        value: ty.Optional[ty.Callable[[T], V]] = None,
    ) -> ty.Dict[K, ty.Any]:
        """Collects the elements into a dict.

        Parameters
        ----------
        key : callable
            Maps an element to its dict key.
        value : callable, optional
            Maps an element to its dict value. If ``None``, the element
            itself is stored.

        Returns
        -------
        mapping : dict
            Later elements overwrite earlier ones sharing a key.
        """
        self._check_bounded()
        if value is None:
            return {key(elem): elem for elem in self}
        return {key(elem): value(elem) for elem in self}

    def to_array(self, dtype: npt.DTypeLike = None) -> npt.NDArray[ty.Any]:
        """Collects the elements into a one dimensional NumPy array.

        Parameters
        ----------
        dtype : dtype-like, optional
            Data type of the array. If ``None``, it is inferred from the
            elements, which are then collected through a list first.

        Returns
        -------
        array : ndarray
            The elements in iteration order.
        """
        self._check_bounded()
        if dtype is None:
            return np.array(list(self))
        count = -1
        if self.category is Category.RANDOM_ACCESS:
            count = len(self)
        return np.fromiter(iter(self), dtype=dtype, count=count)


def as_view(
    iterable: ty.Iterable[T], category: ty.Optional[Category] = None
) -> View[T]:
    """Wraps a Python iterable into a view.

    :group: Views

    Parameters
    ----------
    iterable : Iterable
        The data to view. Existing views are returned unchanged.
    category : Category, optional
        Upper bound on the view's category, eg. to treat a list as a
        forward-only sequence.

    Returns
    -------
    view : View
        Lazy view over ``iterable``.
    """
    if isinstance(iterable, View):
        if category is not None and category < iterable.category:
            raise ValueError(
                "The category of an existing view cannot be capped."
            )
        return iterable
    begin, end = cursors_from(iterable, category)
    return View(begin, end)

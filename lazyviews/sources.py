"""
``lazyviews.sources``
=====================

Views producing their own elements: repeated calls to a function, or
draws from a NumPy random generator. Both may be bounded by an amount,
or left unbounded, in which case the caller decides when to stop.
"""
import numbers
import typing as ty

import numpy as np

from lazyviews.base import Category, Cursor
from lazyviews.view import View

__all__ = [
    "GenerateCursor",
    "RandomCursor",
    "RandomView",
    "generate",
    "random",
    "uniform",
]


T = ty.TypeVar("T")
Distribution = ty.Callable[[np.random.Generator], ty.Any]


class GenerateCursor(Cursor[T]):
    """Counts calls made to a zero argument function.

    :group: Sources

    Parameters
    ----------
    func : callable
        Called on every ``deref()``.
    index : int
        Number of steps taken.
    unbounded : bool
        If ``True``, no two cursors compare equal, so a view over them
        never ends.
    """

    def __init__(
        self, func: ty.Callable[[], T], index: int = 0, unbounded: bool = False
    ) -> None:
        self._func = func
        self._index = index
        self._unbounded = unbounded

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(index={self._index})"

    @property
    def category(self) -> Category:
        return Category.RANDOM_ACCESS

    def deref(self) -> T:
        return self._func()

    def increment(self) -> None:
        self._index = self._index + 1

    def decrement(self) -> None:
        self._index = self._index - 1

    def advance(self, offset: int) -> None:
        self._index = self._index + offset

    def difference(self, other: Cursor[ty.Any]) -> int:
        return self._index - other._index  # type: ignore

    def equals(self, other: Cursor[ty.Any]) -> bool:
        if self._unbounded:
            return False
        return self._index == other._index  # type: ignore

    def copy(self) -> "GenerateCursor[T]":
        return self.__class__(self._func, self._index, self._unbounded)


class RandomCursor(GenerateCursor[ty.Any]):
    """Draws from ``distribution(generator)`` on every ``deref()``.

    :group: Sources
    """

    def __init__(
        self,
        distribution: Distribution,
        generator: np.random.Generator,
        index: int = 0,
        unbounded: bool = False,
    ) -> None:
        super().__init__(lambda: distribution(generator), index, unbounded)
        self._distribution = distribution
        self._generator = generator

    def copy(self) -> "RandomCursor":
        return self.__class__(
            self._distribution, self._generator, self._index, self._unbounded
        )


def _check_amount(amount: ty.Optional[int]) -> bool:
    if amount is None:
        return True
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}.")
    return False


def generate(
    func: ty.Callable[[], T], amount: ty.Optional[int] = None
) -> View[T]:
    """Returns a view calling ``func`` once per element.

    :group: Sources

    Parameters
    ----------
    func : callable
        Zero argument function producing the elements. Side effects are
        allowed; it is called again each time an element is read.
    amount : int, optional
        Number of elements. If ``None``, the view is unbounded.

    Returns
    -------
    view : View
        Random access view of the generated values.

    Raises
    ------
    ValueError
        If ``amount`` is negative.

    Examples
    --------
    >>> import itertools as it
    >>> counter = it.count()
    >>> generate(lambda: next(counter), 4).to_list()
    [0, 1, 2, 3]
    """
    unbounded = _check_amount(amount)
    stop = 0 if unbounded else ty.cast(int, amount)
    return View(
        GenerateCursor(func, 0, unbounded),
        GenerateCursor(func, stop, unbounded),
        unbounded=unbounded,
    )


class RandomView(View[ty.Any]):
    """View of random numbers drawn from a distribution.

    :group: Sources

    Notes
    -----
    The NumPy generator is held by reference, and advances whenever any
    copy of the view's cursors is dereferenced. Sharing a generator
    between threads is the caller's responsibility.
    """

    def __init__(
        self,
        distribution: Distribution,
        generator: np.random.Generator,
        amount: ty.Optional[int] = None,
    ) -> None:
        unbounded = _check_amount(amount)
        stop = 0 if unbounded else ty.cast(int, amount)
        super().__init__(
            RandomCursor(distribution, generator, 0, unbounded),
            RandomCursor(distribution, generator, stop, unbounded),
            unbounded=unbounded,
        )
        self._distribution = distribution
        self._generator = generator

    @property
    def generator(self) -> np.random.Generator:
        return self._generator

    def next_random(self) -> ty.Any:
        """Draws a single value, regardless of the view's length."""
        return self._distribution(self._generator)


def random(
    distribution: Distribution,
    generator: np.random.Generator,
    amount: ty.Optional[int] = None,
) -> RandomView:
    """Returns a view of draws from ``distribution`` using ``generator``.

    :group: Sources

    Parameters
    ----------
    distribution : callable
        Takes the generator and returns one sample, eg.
        ``lambda rng: rng.normal(0.0, 1.0)``.
    generator : numpy.random.Generator
        Source of randomness, shared by reference.
    amount : int, optional
        Number of elements. If ``None``, the view is unbounded.

    Returns
    -------
    view : RandomView
        Random access view of the samples.
    """
    return RandomView(distribution, generator, amount)


def uniform(
    low: numbers.Real,
    high: numbers.Real,
    amount: ty.Optional[int] = None,
    seed: ty.Optional[int] = None,
    generator: ty.Optional[np.random.Generator] = None,
) -> RandomView:
    """Returns a view of uniform random numbers in ``[low, high]``.

    :group: Sources

    Parameters
    ----------
    low, high : int or float
        Inclusive bounds. If both are integral, integers are drawn,
        otherwise floats.
    amount : int, optional
        Number of elements. If ``None``, the view is unbounded.
    seed : int, optional
        Seed for a new ``numpy.random.default_rng()`` generator. Ignored
        if ``generator`` is passed.
    generator : numpy.random.Generator, optional
        Existing generator to draw from.

    Returns
    -------
    view : RandomView
        Random access view of the samples.

    Raises
    ------
    ValueError
        If ``high`` is less than ``low``, or ``amount`` is negative.
    """
    if high < low:
        raise ValueError(f"high ({high}) must not be less than low ({low}).")
    if generator is None:
        generator = np.random.default_rng(seed)
    integral = isinstance(low, numbers.Integral) and isinstance(
        high, numbers.Integral
    )
    if integral:

        def distribution(rng: np.random.Generator) -> int:
            return int(rng.integers(low, high, endpoint=True))

    else:

        def distribution(rng: np.random.Generator) -> float:
            return float(rng.uniform(low, high))

    return RandomView(distribution, generator, amount)

import operator as op
import typing as ty
import warnings

import pytest
from hypothesis import given, settings, strategies as st

import lazyviews as lzv
from lazyviews.base import Category


def identity(x: ty.Any) -> ty.Any:
    return x


def pair(a: ty.Any, b: ty.Any) -> ty.Tuple[ty.Any, ty.Any]:
    return a, b


def fail(*args: ty.Any) -> ty.NoReturn:
    raise AssertionError("should not be called")


def join(a: ty.Iterable[ty.Any], b: ty.Iterable[ty.Any]) -> ty.List[ty.Any]:
    return lzv.join_where(a, b, identity, identity, pair).to_list()


def test_example() -> None:
    assert join([1, 3, 5], [1, 2, 3, 4, 5]) == [(1, 1), (3, 3), (5, 5)]


def test_no_overlap() -> None:
    assert join([1, 3, 5], [2, 4, 6]) == []


def test_empty_b() -> None:
    """Tests that an empty second input ends the join straight away,
    without calling any selector.
    """
    view = lzv.join_where([1, 2, 3], [], fail, fail, fail)
    assert view.begin() == view.end()
    assert view.to_list() == []


def test_empty_a() -> None:
    view = lzv.join_where([], [1, 2, 3], fail, fail, fail)
    assert view.to_list() == []


def test_duplicate_keys_in_b() -> None:
    """Tests that only the first matching element of B is paired."""
    records = [(1, "first"), (1, "second"), (2, "third")]
    view = lzv.join_where([1], records, identity, op.itemgetter(0), pair)
    assert view.to_list() == [(1, (1, "first"))]


def test_duplicate_keys_in_a() -> None:
    """Tests that every element of A finds its match, even when an
    earlier match moved the search past it.
    """
    assert join([1, 1, 2], [1, 2]) == [(1, 1), (1, 1), (2, 2)]


def test_unordered_a() -> None:
    assert join([5, 1, 3], [1, 2, 3, 4, 5]) == [(5, 5), (1, 1), (3, 3)]


def test_unsorted_b_is_incomplete() -> None:
    """Tests that an unsorted second input loses matches, rather than
    raising an error.
    """
    full = {(1, 1), (2, 2), (3, 3)}
    result = join([1, 2, 3], [3, 1, 2])
    assert set(result) < full
    assert result == [(2, 2)]


def test_check_sorted_warns() -> None:
    with pytest.warns(UserWarning, match="not sorted"):
        lzv.join_where([1], [3, 1, 2], identity, identity, pair, check_sorted=True)


def test_check_sorted_quiet() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        view = lzv.join_where(
            [1], [1, 2, 3], identity, identity, pair, check_sorted=True
        )
    assert view.to_list() == [(1, 1)]


def test_records() -> None:
    """Tests joining records on a field, with a combining selector."""
    people = [("ada", 2), ("brian", 1), ("carol", 3), ("dan", 2)]
    depts = [(1, "ops"), (2, "research"), (3, "sales")]
    view = lzv.join_where(
        people,
        depts,
        op.itemgetter(1),
        op.itemgetter(0),
        lambda person, dept: f"{person[0]}:{dept[1]}",
    )
    assert view.to_list() == [
        "ada:research",
        "brian:ops",
        "carol:sales",
        "dan:research",
    ]


@pytest.mark.parametrize(
    "make_b",
    [
        list,
        iter,
        lambda b: lzv.as_view(b, Category.BIDIRECTIONAL),
        lambda b: lzv.as_view(b, Category.FORWARD),
        lambda b: lzv.mapped(identity, b),
    ],
)
def test_b_categories(make_b: ty.Callable[[ty.List[int]], ty.Any]) -> None:
    """Tests that the search works over any category of B."""
    b = [0, 2, 2, 4, 6, 8, 10]
    assert join(iter([8, 2, 3, 10, 0]), make_b(b)) == [
        (8, 8),
        (2, 2),
        (10, 10),
        (0, 0),
    ]


@given(
    st.lists(st.integers(-20, 20)),
    st.lists(st.integers(-20, 20)).map(sorted),
)
@settings(max_examples=100, deadline=None)
def test_matches_nested_loop(a: ty.List[int], b: ty.List[int]) -> None:
    """Tests that every element of A with a key in sorted B is paired
    exactly once, in the order of A.
    """
    expected = [(x, x) for x in a if x in b]
    assert join(a, b) == expected
    assert join(iter(a), iter(b)) == expected


def test_forward_only() -> None:
    view = lzv.join_where([1, 2], [1, 2], identity, identity, pair)
    assert view.category is Category.FORWARD
    with pytest.raises(TypeError):
        len(view)


def test_equality_compares_a() -> None:
    view = lzv.join_where([1, 2, 3], [1, 2, 3], identity, identity, pair)
    first = view.begin()
    second = first.copy()
    assert first == second
    second.increment()
    assert first != second
    assert second.deref() == (2, 2)
    assert first.deref() == (1, 1)


def test_reiteration() -> None:
    view = lzv.join_where(iter([3, 1]), [1, 2, 3], identity, identity, pair)
    assert view.to_list() == view.to_list() == [(3, 3), (1, 1)]


def swapped(t: ty.Tuple[ty.Any, ty.Any]) -> ty.Tuple[ty.Any, ty.Any]:
    return t[1], t[0]


def test_join_over_product() -> None:
    """Tests searching a product view from a position past its first
    element.
    """
    b = lzv.cartesian_product([0, 1, 2], [0, 1])
    view = lzv.join_where([(0, 1), (1, 2)], b, identity, swapped, pair)
    assert view.to_list() == [((0, 1), (1, 0)), ((1, 2), (2, 1))]


@given(st.integers(1, 5), st.integers(1, 5))
@settings(max_examples=30, deadline=None)
def test_product_keys_all_found(rows: int, cols: int) -> None:
    """Tests that every key of a sorted product view is found, in any
    order of A.
    """
    b = lzv.cartesian_product(range(rows), range(cols))
    a = [swapped(t) for t in reversed(b.to_list())]
    result = lzv.join_where(a, b, identity, swapped, pair).to_list()
    assert result == [(key, swapped(key)) for key in a]

import itertools as it
import math
import typing as ty

import pytest
from hypothesis import given, settings, strategies as st

import lazyviews as lzv
from lazyviews.base import Category, CategoryError, distance


Seqs = ty.List[ty.List[int]]


def odometer(*seqs: ty.Sequence[ty.Any]) -> ty.List[ty.Tuple[ty.Any, ...]]:
    """Reference order of a product, with the first sequence varying
    fastest.
    """
    return [tuple(reversed(combo)) for combo in it.product(*reversed(seqs))]


@st.composite
def sequences(
    draw: st.DrawFn,
    min_dims: int = 2,
    max_dims: int = 4,
    min_size: int = 0,
    max_size: int = 4,
    unique: bool = False,
) -> Seqs:
    """Custom strategy providing a list of integer lists, to be used
    as the dimensions of a product.
    """
    ndim = draw(st.integers(min_dims, max_dims))
    elems = st.integers(-50, 50)
    return [
        draw(st.lists(elems, min_size=min_size, max_size=max_size, unique=unique))
        for _ in range(ndim)
    ]


def test_example_order() -> None:
    """Tests that the first sequence varies fastest."""
    view = lzv.cartesian_product([1, 2], ["a", "b", "c"])
    assert view.to_list() == [
        (1, "a"),
        (2, "a"),
        (1, "b"),
        (2, "b"),
        (1, "c"),
        (2, "c"),
    ]


@given(sequences())
@settings(max_examples=50, deadline=None)
def test_len_is_product(seqs: Seqs) -> None:
    """Tests that the length is the product of the input lengths."""
    view = lzv.cartesian_product(*seqs)
    assert len(view) == math.prod(map(len, seqs))
    assert view.end() - view.begin() == math.prod(map(len, seqs))


@given(sequences(unique=True))
@settings(max_examples=50, deadline=None)
def test_iteration_order(seqs: Seqs) -> None:
    """Tests that iteration visits every combination once, in odometer
    order.
    """
    combos = lzv.cartesian_product(*seqs).to_list()
    assert combos == odometer(*seqs)
    assert len(set(combos)) == len(combos) == math.prod(map(len, seqs))


@given(sequences(min_size=1), st.data())
@settings(max_examples=50, deadline=None)
def test_advance_round_trip(seqs: Seqs, data: st.DataObject) -> None:
    """Tests that moving a position forward then back returns to it."""
    view = lzv.cartesian_product(*seqs)
    total = len(view)
    start = data.draw(st.integers(0, total))
    offset = data.draw(st.integers(-start, total - start))
    pos = view.begin() + start
    assert (pos + offset) - offset == pos
    moved = pos.copy()
    moved.advance(offset)
    moved.advance(-offset)
    assert moved == pos


@given(sequences(min_size=1))
@settings(max_examples=50, deadline=None)
def test_random_access_matches_iteration(seqs: Seqs) -> None:
    """Tests that jumping to an offset lands on the same element as
    iterating to it.
    """
    view = lzv.cartesian_product(*seqs)
    expected = view.to_list()
    assert [view[idx] for idx in range(len(view))] == expected
    begin = view.begin()
    assert [(begin + idx).deref() for idx in range(len(view))] == expected
    assert view.begin() + len(view) == view.end()


@given(sequences(min_size=1))
@settings(max_examples=50, deadline=None)
def test_decrement_walks_backwards(seqs: Seqs) -> None:
    """Tests that decrementing from the end visits the elements in
    reverse order, restoring every dimension on the first step.
    """
    view = lzv.cartesian_product(*seqs)
    begin = view.begin()
    cursor = view.end()
    backwards = []
    while cursor != begin:
        cursor.decrement()
        backwards.append(cursor.deref())
    assert backwards == view.to_list()[::-1]


@given(sequences(min_size=1, min_dims=3))
@settings(max_examples=20, deadline=None)
def test_end_minus_one_is_last(seqs: Seqs) -> None:
    """Tests that stepping back from the end by offset lands on the last
    combination.
    """
    view = lzv.cartesian_product(*seqs)
    last = tuple(seq[-1] for seq in seqs)
    assert (view.end() - 1).deref() == last
    assert view[-1] == last


@pytest.mark.parametrize("empty_dim", [0, 1, 2])
def test_empty_input(empty_dim: int) -> None:
    """Tests that a product with any empty input starts at its end."""
    seqs: ty.List[ty.List[int]] = [[1, 2, 3], [4, 5], [6]]
    seqs[empty_dim] = []
    view = lzv.cartesian_product(*seqs)
    assert view.begin() == view.end()
    assert not view
    assert len(view) == 0
    assert view.to_list() == []


def test_empty_input_not_dereferenced() -> None:
    """Tests that no element is read when another input is empty."""
    calls = []

    def record(x: int) -> int:
        calls.append(x)
        return x

    view = lzv.cartesian_product(lzv.mapped(record, [1, 2, 3]), [])
    assert view.to_list() == []
    assert calls == []


def test_requires_two_inputs() -> None:
    with pytest.raises(ValueError):
        lzv.cartesian_product([1, 2])


def test_category_is_weakest_input() -> None:
    """Tests that the product category is the minimum of the inputs'."""
    rand = lzv.cartesian_product([1, 2], (1, 2))
    assert rand.category is Category.RANDOM_ACCESS
    bidir = lzv.cartesian_product(
        [1, 2], lzv.as_view([3, 4], Category.BIDIRECTIONAL)
    )
    assert bidir.category is Category.BIDIRECTIONAL
    fwd = lzv.cartesian_product(iter([1, 2]), "ab", [0])
    assert fwd.category is Category.FORWARD


def test_bidirectional_product() -> None:
    """Tests that a bidirectional product decrements, but refuses
    offsets and lengths.
    """
    view = lzv.cartesian_product(
        [1, 2], lzv.as_view(["a", "b"], Category.BIDIRECTIONAL)
    )
    cursor = view.end()
    cursor.decrement()
    assert cursor.deref() == (2, "b")
    with pytest.raises(CategoryError):
        cursor.advance(1)
    with pytest.raises(TypeError):
        len(view)


def test_forward_inputs() -> None:
    """Tests that single-pass iterables are buffered, so inner
    dimensions can be traversed repeatedly.
    """
    view = lzv.cartesian_product(iter([1, 2]), (c for c in "ab"))
    assert view.to_list() == [(1, "a"), (2, "a"), (1, "b"), (2, "b")]
    assert view.to_list() == [(1, "a"), (2, "a"), (1, "b"), (2, "b")]
    with pytest.raises(CategoryError):
        view.begin().decrement()


def test_ordering() -> None:
    """Tests that positions are ordered by their place in iteration."""
    view = lzv.cartesian_product([1, 2, 3], "ab")
    begin = view.begin()
    assert begin < begin + 1 < begin + 4 <= view.end()
    assert view.end() > begin + 5
    assert (begin + 4).ordinal() == 4
    assert view.end().ordinal() == 6


def test_three_dimensions() -> None:
    """Tests carrying through a middle dimension."""
    view = lzv.cartesian_product([0, 1], [0, 1], [0, 1])
    assert view.to_list() == [
        (x, y, z) for z in (0, 1) for y in (0, 1) for x in (0, 1)
    ]
    assert view[5] == (1, 0, 1)


def test_rebuilt_view_is_identical() -> None:
    """Tests that no state survives between views or iterations."""
    seqs = ([1, 2, 3], "xy", (True, False))
    first = lzv.cartesian_product(*seqs)
    assert first.to_list() == first.to_list()
    assert lzv.cartesian_product(*seqs).to_list() == first.to_list()


def test_distance_from_middle() -> None:
    """Tests that step counts hold from any position, not only from
    the beginning.
    """
    view = lzv.cartesian_product([0, 1], [0, 1, 2])
    begin = view.begin()
    assert distance(begin + 1, view.end()) == 5
    assert distance(begin + 2, begin + 5) == 3
    assert (begin + 5).steps_from(begin + 2) == 3


def test_wrapped_ordering() -> None:
    """Tests that adaptors over a product order positions by iteration."""
    for view in (
        lzv.mapped(str, lzv.cartesian_product([1, 2, 3], "ab")),
        lzv.enumerated(lzv.cartesian_product([1, 2, 3], "ab")),
    ):
        begin = view.begin()
        assert begin + 2 > begin + 1
        assert begin + 1 < begin + 3 < view.end()
        assert distance(begin + 1, view.end()) == 5
        assert len(view) == 6


def test_nested_product() -> None:
    """Tests a product whose input is itself a product."""
    inner = lzv.cartesian_product([0, 1], [0, 1])
    view = lzv.cartesian_product(inner, "ab")
    assert len(view) == 8
    assert view.to_list() == [(p, c) for c in "ab" for p in inner]
    assert view[5] == ((1, 0), "b")
    assert distance(view.begin() + 3, view.end()) == 5

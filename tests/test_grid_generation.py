import random

import pytest

from ecogrid.grid import (
    CLEARED,
    HOLE,
    Grid,
    GridConstructionError,
    InfeasibleBoardError,
    InsufficientPiecesError,
    InvalidLayoutError,
    LayoutGenerationError,
)
from tests.helpers import SLIDE_LAYOUT, count_holes, count_types


@pytest.mark.parametrize("num_types,width,height", [(4, 4, 4), (3, 3, 4), (7, 5, 5), (1, 2, 2)])
def test_infeasible_type_budget_fails(num_types, width, height):
    with pytest.raises(InfeasibleBoardError):
        Grid(num_types, width, height, rng=random.Random(1))


def test_unsatisfiable_layout_gives_up():
    # Fifteen pieces of one type on a 4x4 board always contain a 2x2 block.
    with pytest.raises(LayoutGenerationError) as info:
        Grid(1, 4, 4, rng=random.Random(2))
    assert isinstance(info.value, GridConstructionError)
    assert (info.value.width, info.value.height) == (4, 4)


@pytest.mark.parametrize("num_types,width,height", [(1, 5, 1), (2, 3, 3), (6, 5, 5)])
def test_exact_type_budget_succeeds(num_types, width, height):
    grid = Grid(num_types, width, height, rng=random.Random(7))
    assert all(count == 4 for count in grid.live_counts().values())


def test_construction_errors_are_distinguishable():
    assert issubclass(InfeasibleBoardError, GridConstructionError)
    assert issubclass(InsufficientPiecesError, GridConstructionError)
    assert not issubclass(InfeasibleBoardError, InsufficientPiecesError)
    # Callers that only know about ValueError still see a failure.
    assert issubclass(GridConstructionError, ValueError)


@pytest.mark.parametrize("seed", range(25))
def test_generated_grid_has_no_matches(seed):
    rng = random.Random(seed)
    grid = Grid(3, 4 + seed % 3, 4 + seed % 2, rng=rng)
    assert grid.matches_in_grid() == []


@pytest.mark.parametrize("seed", range(10))
def test_generated_grid_counts_are_balanced(seed):
    grid = Grid(4, 5, 6, rng=random.Random(seed))
    counts = count_types(grid)
    assert counts == grid.live_counts()
    assert count_holes(grid) == 1
    assert sum(counts.values()) == 5 * 6 - 1
    assert max(counts.values()) - min(counts.values()) <= 1
    assert min(counts.values()) >= 4


def test_same_seed_generates_same_layout():
    first = Grid(3, 5, 5, rng=random.Random(42))
    second = Grid(3, 5, 5, rng=random.Random(42))
    assert first.layout() == second.layout()


def test_from_layout_keeps_supplied_types():
    grid = Grid.from_layout(3, SLIDE_LAYOUT)
    assert grid.layout() == SLIDE_LAYOUT
    assert grid.hole == (2, 1)
    assert grid.live_counts() == {1: 5, 2: 5, 3: 5}
    assert (grid.width, grid.height) == (4, 4)


def test_from_layout_rejects_two_holes():
    layout = [row[:] for row in SLIDE_LAYOUT]
    layout[0][0] = HOLE
    with pytest.raises(InvalidLayoutError):
        Grid.from_layout(3, layout)


def test_from_layout_rejects_unknown_type():
    layout = [row[:] for row in SLIDE_LAYOUT]
    layout[0][0] = 9
    with pytest.raises(InvalidLayoutError):
        Grid.from_layout(3, layout)


def test_from_layout_rejects_ragged_columns():
    layout = [row[:] for row in SLIDE_LAYOUT]
    layout[3] = layout[3][:3]
    with pytest.raises(InvalidLayoutError):
        Grid.from_layout(3, layout)


def test_from_layout_rejects_short_type():
    layout = [
        [1, 1, 2, 2],
        [1, 1, 2, 2],
        [3, 3, 3, 1],
        [1, 2, 0, 2],
    ]
    with pytest.raises(InsufficientPiecesError) as info:
        Grid.from_layout(3, layout)
    assert info.value.type_id == 3
    assert info.value.count == 3


def test_from_layout_accepts_fully_cleared_type():
    layout = [
        [1, 1, CLEARED],
        [1, 1, CLEARED],
        [CLEARED, CLEARED, HOLE],
    ]
    grid = Grid.from_layout(2, layout)
    assert grid.live_counts() == {1: 4, 2: 0}

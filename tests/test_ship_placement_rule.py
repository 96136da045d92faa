import itertools
import random

import pytest

from navalbattle.grid import CellState, Grid
from navalbattle.placement import (
    CapacityExceeded,
    PlacementImpossible,
    candidate_placements,
    fits,
    place_ships,
)
from navalbattle.ship import Orientation


class CountingRandom(random.Random):
    """Random that records how often placement asked it for a choice."""

    def __init__(self, seed: int) -> None:
        super().__init__(seed)
        self.choices = 0

    def choice(self, seq):
        self.choices += 1
        return super().choice(seq)


def _buffered(cells):
    return {(r + dr, c + dc) for r, c in cells for dr in (-1, 0, 1) for dc in (-1, 0, 1)}


def test_cannot_place_adjacent_ships():
    """fits() rejects placements touching another ship, diagonals included.

    A three-long ship is placed horizontally at (2, 1); a one-cell ship is
    then tried on every cell of the surrounding ring, and every attempt must
    be rejected.
    """
    grid = Grid(5)
    row, col, size = 2, 1, 3
    assert fits(grid, row, col, size, Orientation.HORIZONTAL)
    for c in range(col, col + size):
        grid.mark_occupied(row, c)

    ring = _buffered([(row, c) for c in range(col, col + size)])
    for r, c in ring:
        if not grid.is_in_bounds(r, c):
            continue
        assert not fits(grid, r, c, 1, Orientation.HORIZONTAL), (r, c)

    # one step further out is fine
    assert fits(grid, 0, 0, 1, Orientation.HORIZONTAL)
    assert fits(grid, 4, 4, 1, Orientation.VERTICAL)


def test_fits_respects_board_edges():
    grid = Grid(5)
    assert fits(grid, 0, 0, 5, Orientation.HORIZONTAL)
    assert not fits(grid, 0, 1, 5, Orientation.HORIZONTAL)
    assert fits(grid, 0, 4, 5, Orientation.VERTICAL)
    assert not fits(grid, 1, 4, 5, Orientation.VERTICAL)


def test_candidate_placements_on_empty_board():
    # a 5-long ship on a 5x5 board: 5 rows horizontally + 5 columns vertically
    assert len(candidate_placements(Grid(5), 5)) == 10
    # a 1-cell ship: every cell, in both orientations
    assert len(candidate_placements(Grid(5), 1)) == 50


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("sizes", [[3, 2, 1], [2, 2, 1, 1], [1, 1, 1, 1], [4, 1]])
def test_placed_ships_never_touch(seed, sizes):
    grid = Grid(5)
    ships = place_ships(grid, sizes, rng=random.Random(seed))

    assert sorted(s.size for s in ships) == sorted(sizes)
    for ship in ships:
        for r, c in ship.footprint():
            assert grid.is_in_bounds(r, c)
            assert grid.cell_state(r, c) is CellState.OCCUPIED
    assert grid.count(CellState.OCCUPIED) == sum(sizes)

    for a, b in itertools.combinations(ships, 2):
        assert not (_buffered(a.footprint()) & set(b.footprint()))


def test_ships_are_placed_largest_first():
    ships = place_ships(Grid(5), [1, 3, 2], rng=random.Random(0))
    assert [s.size for s in ships] == [3, 2, 1]


def test_seeded_placement_is_reproducible():
    a = place_ships(Grid(5), [3, 2, 1], rng=random.Random(42))
    b = place_ships(Grid(5), [3, 2, 1], rng=random.Random(42))
    assert [s.footprint() for s in a] == [s.footprint() for s in b]


def test_capacity_exceeded_before_any_random_choice():
    rng = CountingRandom(0)
    grid = Grid(5)
    with pytest.raises(CapacityExceeded) as exc:
        place_ships(grid, [5, 5, 5, 5, 5, 5], rng=rng)
    assert rng.choices == 0
    assert exc.value.sizes == (5, 5, 5, 5, 5, 5)
    assert exc.value.board_size == 5
    assert grid.count(CellState.EMPTY) == 25


def test_ship_longer_than_board_always_fails():
    rng = CountingRandom(1)
    with pytest.raises(PlacementImpossible):
        place_ships(Grid(5), [6], rng=rng)
    assert rng.choices == 0


def test_unpackable_fleet_gives_up_and_clears_grid():
    # 25 cells are enough on paper, but buffered 5-long ships need a gap row
    grid = Grid(5)
    with pytest.raises(PlacementImpossible):
        place_ships(grid, [5, 5, 5, 5, 5], rng=random.Random(3), attempts=10)
    assert grid.count(CellState.EMPTY) == 25


def test_zero_ships_is_trivial():
    grid = Grid(5)
    assert place_ships(grid, [], rng=random.Random(0)) == []
    assert grid.count(CellState.EMPTY) == 25


@pytest.mark.parametrize("bad", [[0], [-1, 2], [2, True]])
def test_non_positive_or_bool_sizes_are_contract_violations(bad):
    with pytest.raises((ValueError, TypeError)):
        place_ships(Grid(5), bad)


def test_non_integer_sizes_are_contract_violations():
    with pytest.raises(TypeError):
        place_ships(Grid(5), ["3"])  # type: ignore[list-item]

"""Randomised fleet placement with a one-cell buffer between ships.

Placement is greedy per attempt: ships are placed largest first, each at a
position drawn uniformly from every position that is still legal. When some
ship has nowhere to go, the whole attempt is thrown away and the board is
restarted from scratch. There is no backtracking, so a fleet that *could* be
packed may still be reported as impossible once the attempt budget runs out.
"""

from __future__ import annotations

import random
from typing import Iterable, Protocol, Sequence, TypeVar

from . import config as _cfg
from .grid import Grid
from .ship import Orientation, Ship

T = TypeVar("T")


class Chooser(Protocol):
    def choice(self, seq: Sequence[T]) -> T: ...


class PlacementError(Exception):
    """Base for fleets that cannot be placed on the board."""

    def __init__(self, message: str, sizes: Sequence[int], board_size: int) -> None:
        super().__init__(message)
        self.sizes = tuple(sizes)
        self.board_size = board_size


class CapacityExceeded(PlacementError):
    """The fleet has more segments than the board has cells."""


class PlacementImpossible(PlacementError):
    """No attempt within the retry budget found room for every ship."""


def _validate_sizes(sizes: Iterable[int]) -> list[int]:
    checked = []
    for size in sizes:
        if isinstance(size, bool) or not isinstance(size, int):
            raise TypeError(f"ship sizes must be integers, got {size!r}")
        if size < 1:
            raise ValueError(f"ship sizes must be positive, got {size}")
        checked.append(size)
    return checked


def fits(grid: Grid, row: int, col: int, size: int, orientation: Orientation) -> bool:
    """Return True if a ship fits at (*row*, *col*) without touching another ship.

    The footprint must be on the board, and the footprint plus the ring of
    cells around it (diagonals included) must be empty.
    """
    if orientation is Orientation.HORIZONTAL:
        end_row, end_col = row, col + size - 1
    else:
        end_row, end_col = row + size - 1, col
    if not (grid.is_in_bounds(row, col) and grid.is_in_bounds(end_row, end_col)):
        return False
    return grid.is_region_empty(row - 1, col - 1, end_row + 1, end_col + 1)


def candidate_placements(grid: Grid, size: int) -> list[tuple[int, int, Orientation]]:
    """Every legal (row, col, orientation) for a ship of *size* on the current grid."""
    return [
        (row, col, orientation)
        for row in range(grid.size)
        for col in range(grid.size)
        for orientation in Orientation
        if fits(grid, row, col, size, orientation)
    ]


def _try_attempt(grid: Grid, sizes: list[int], rng: Chooser) -> list[Ship] | None:
    grid.clear()
    ships: list[Ship] = []
    for size in sizes:
        options = candidate_placements(grid, size)
        if not options:
            return None
        row, col, orientation = rng.choice(options)
        ship = Ship(size, orientation, row, col)
        for r, c in ship.footprint():
            grid.mark_occupied(r, c)
        ships.append(ship)
    return ships


def place_ships(
    grid: Grid,
    sizes: Iterable[int],
    *,
    rng: Chooser | None = None,
    attempts: int = _cfg.PLACEMENT_ATTEMPTS,
) -> list[Ship]:
    """Place one ship per entry of *sizes* on *grid* and return them.

    On success every ship cell on *grid* is Occupied. On failure the grid is
    left empty and a ``PlacementError`` is raised.
    """
    requested = _validate_sizes(sizes)
    if sum(requested) > grid.size * grid.size:
        raise CapacityExceeded(
            f"{sum(requested)} ship cells do not fit on a {grid.size}x{grid.size} board",
            requested,
            grid.size,
        )
    if any(size > grid.size for size in requested):
        raise PlacementImpossible(
            f"a ship longer than {grid.size} cannot be placed",
            requested,
            grid.size,
        )

    rng = rng if rng is not None else random.Random()
    ordered = sorted(requested, reverse=True)
    for _ in range(attempts):
        ships = _try_attempt(grid, ordered, rng)
        if ships is not None:
            return ships

    grid.clear()
    raise PlacementImpossible(
        f"no placement found for ships {requested} after {attempts} attempts",
        requested,
        grid.size,
    )

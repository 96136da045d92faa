"""
game.py

Core game state for one hidden fleet:
 - Game owns a Grid and the ships placed on it
 - Game.resolve() is the shot state machine that turns a coordinate into a
   ShotResult

Nothing here performs I/O or logs; the session layer translates results to
wire text.
"""

from __future__ import annotations

from typing import Iterable

from . import config as _cfg
from .grid import CellState, Grid
from .placement import Chooser, place_ships
from .results import AlreadyShot, GameOver, Hit, Invalid, Miss, ShotResult, Sunk, changes_state
from .ship import Ship


class GameStateError(RuntimeError):
    """Raised when the game is driven out of order (e.g. shooting before placement)."""


class Game:
    """
    One fleet hidden on one board.

    Lifecycle: construct, ``place()`` once, then ``resolve()`` shots until
    ``is_over``. A failed placement leaves the game unplaced, so ``place()``
    may be called again with another fleet.
    """

    def __init__(
        self,
        size: int = _cfg.BOARD_SIZE,
        *,
        rng: Chooser | None = None,
        attempts: int = _cfg.PLACEMENT_ATTEMPTS,
    ):
        self.grid = Grid(size)
        self.ships: list[Ship] = []
        self.placed = False
        self.shots = 0
        self._rng = rng
        self._attempts = attempts

    @classmethod
    def new(
        cls,
        sizes: Iterable[int],
        size: int = _cfg.BOARD_SIZE,
        *,
        rng: Chooser | None = None,
        attempts: int = _cfg.PLACEMENT_ATTEMPTS,
    ) -> "Game":
        """Create a game and place *sizes* on it in one step."""
        game = cls(size, rng=rng, attempts=attempts)
        game.place(sizes)
        return game

    @property
    def size(self) -> int:
        return self.grid.size

    def place(self, sizes: Iterable[int]) -> list[Ship]:
        """Randomly place a fleet; raises PlacementError if it doesn't fit."""
        if self.placed:
            raise GameStateError("ships have already been placed")
        self.ships = place_ships(self.grid, sizes, rng=self._rng, attempts=self._attempts)
        self.placed = True
        return self.ships

    def ship_at(self, row: int, col: int) -> Ship | None:
        for ship in self.ships:
            if ship.occupies_position(row, col):
                return ship
        return None

    def all_ships_sunk(self) -> bool:
        return all(ship.is_sunk() for ship in self.ships)

    @property
    def is_over(self) -> bool:
        """True once the last ship has been sunk."""
        return self.placed and bool(self.ships) and self.all_ships_sunk()

    def resolve(self, row: int, col: int) -> ShotResult:
        """Process a shot at (*row*, *col*) and return its outcome."""
        if not self.placed:
            raise GameStateError("cannot resolve shots before ships are placed")
        if isinstance(row, bool) or isinstance(col, bool) or not isinstance(row, int) or not isinstance(col, int):
            raise TypeError(f"coordinates must be integers, got ({row!r}, {col!r})")

        result = self._resolve(row, col)
        if changes_state(result):
            self.shots += 1
        return result

    def _resolve(self, row: int, col: int) -> ShotResult:
        if not self.grid.is_in_bounds(row, col):
            return Invalid()

        state = self.grid.cell_state(row, col)
        if state in (CellState.HIT, CellState.MISS):
            return AlreadyShot()

        if state is CellState.OCCUPIED:
            self.grid.mark_hit(row, col)
            ship = self.ship_at(row, col)
            if ship is None:
                raise GameStateError(f"occupied cell ({row},{col}) has no owning ship")
            ship.register_hit(row, col)
            if ship.is_sunk():
                if self.all_ships_sunk():
                    return GameOver(ship.size)
                return Sunk(ship.size)
            return Hit()

        self.grid.mark_miss(row, col)
        return Miss()

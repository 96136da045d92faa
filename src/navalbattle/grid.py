"""
grid.py

Fixed-size square cell matrix for one hidden fleet.

The board is stored as an ``int8`` numpy array of ``CellState`` values so the
placement engine can test a footprint and its buffer ring with a single
slice instead of nested loops.
"""

from __future__ import annotations

import enum

import numpy as np

from . import config as _cfg

# Board legend shared with clients: '~' water, 'X' hit, 'O' miss.
# 'S' only ever appears in server-side (revealed) dumps.
WATER = "~"
SHIP = "S"
HIT = "X"
MISS = "O"


class CellState(enum.IntEnum):
    EMPTY = 0
    OCCUPIED = 1
    HIT = 2
    MISS = 3


_SYMBOLS = {
    CellState.EMPTY: WATER,
    CellState.OCCUPIED: SHIP,
    CellState.HIT: HIT,
    CellState.MISS: MISS,
}

# Legal single-step transitions; anything else would be a regression.
_TRANSITIONS = {
    CellState.OCCUPIED: CellState.EMPTY,
    CellState.HIT: CellState.OCCUPIED,
    CellState.MISS: CellState.EMPTY,
}


class Grid:
    """
    Represents a single *size* x *size* board.

    Cells only ever move Empty -> Occupied (placement), Occupied -> Hit or
    Empty -> Miss (shots). ``clear`` is the one exception and is reserved for
    the placement engine restarting an attempt.
    """

    def __init__(self, size: int = _cfg.BOARD_SIZE):
        if size < 1:
            raise ValueError(f"board size must be positive, got {size}")
        self.size = size
        self._cells = np.zeros((size, size), dtype=np.int8)

    @property
    def width(self) -> int:
        return self.size

    @property
    def height(self) -> int:
        return self.size

    def is_in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell_state(self, row: int, col: int) -> CellState:
        if not self.is_in_bounds(row, col):
            raise IndexError(f"({row},{col}) is outside a {self.size}x{self.size} board")
        return CellState(int(self._cells[row, col]))

    def is_region_empty(self, r0: int, c0: int, r1: int, c1: int) -> bool:
        """Return True if every cell in the inclusive rectangle is Empty.

        The rectangle is clipped to the board, so callers can pass a buffer
        ring that hangs over the edge.
        """
        r0, c0 = max(r0, 0), max(c0, 0)
        r1, c1 = min(r1, self.size - 1), min(c1, self.size - 1)
        if r0 > r1 or c0 > c1:
            return True
        return not self._cells[r0 : r1 + 1, c0 : c1 + 1].any()

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self._cells == state))

    # -------------------- mutators --------------------

    def _transition(self, row: int, col: int, new: CellState) -> None:
        current = self.cell_state(row, col)
        if current is not _TRANSITIONS[new]:
            raise ValueError(f"cell ({row},{col}) cannot go from {current.name} to {new.name}")
        self._cells[row, col] = new

    def mark_occupied(self, row: int, col: int) -> None:
        self._transition(row, col, CellState.OCCUPIED)

    def mark_hit(self, row: int, col: int) -> None:
        self._transition(row, col, CellState.HIT)

    def mark_miss(self, row: int, col: int) -> None:
        self._transition(row, col, CellState.MISS)

    def clear(self) -> None:
        self._cells.fill(CellState.EMPTY)

    # -------------------- display --------------------

    def rows(self, *, reveal: bool = True) -> list[str]:
        """Board as legend strings, one per row. Ships are hidden unless *reveal*."""
        out: list[str] = []
        for r in range(self.size):
            cells = []
            for c in range(self.size):
                state = CellState(int(self._cells[r, c]))
                if state is CellState.OCCUPIED and not reveal:
                    state = CellState.EMPTY
                cells.append(_SYMBOLS[state])
            out.append(" ".join(cells))
        return out

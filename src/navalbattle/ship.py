"""Ship geometry and per-segment hit tracking."""

from __future__ import annotations

import enum


class Orientation(enum.Enum):
    """Direction a ship extends from its anchor cell."""

    HORIZONTAL = "H"
    VERTICAL = "V"


class Ship:
    """
    A single ship on the board.

    Geometry (size, orientation, anchor) is fixed at construction. The only
    mutable state is the per-segment hit mask, indexed from the anchor along
    the orientation. Hits are never undone, so once sunk a ship stays sunk.
    """

    __slots__ = ("size", "orientation", "row", "col", "_segments")

    def __init__(self, size: int, orientation: Orientation, row: int, col: int):
        if size < 1:
            raise ValueError(f"ship size must be positive, got {size}")
        self.size = size
        self.orientation = orientation
        self.row = row
        self.col = col
        self._segments = [False] * size

    def __repr__(self) -> str:
        return (
            f"Ship(size={self.size}, orientation={self.orientation.name}, "
            f"row={self.row}, col={self.col}, hits={self.hits})"
        )

    @property
    def horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL

    @property
    def hits(self) -> int:
        """Number of segments hit so far."""
        return sum(self._segments)

    def footprint(self) -> list[tuple[int, int]]:
        """Cells covered by the ship, starting at the anchor."""
        if self.horizontal:
            return [(self.row, self.col + i) for i in range(self.size)]
        return [(self.row + i, self.col) for i in range(self.size)]

    def _segment_index(self, row: int, col: int) -> int | None:
        if self.horizontal:
            if row == self.row and self.col <= col < self.col + self.size:
                return col - self.col
        elif col == self.col and self.row <= row < self.row + self.size:
            return row - self.row
        return None

    def occupies_position(self, row: int, col: int) -> bool:
        return self._segment_index(row, col) is not None

    def register_hit(self, row: int, col: int) -> bool:
        """Record a hit at (*row*, *col*); return False if the cell isn't part of this ship."""
        idx = self._segment_index(row, col)
        if idx is None:
            return False
        self._segments[idx] = True
        return True

    def is_sunk(self) -> bool:
        return all(self._segments)

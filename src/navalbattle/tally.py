"""Remaining-ships bookkeeping derived from a stream of shot results.

The tally never has authority of its own: it is a fold of the ``Sunk`` and
``GameOver`` results the server reported over the fleet the client asked for,
and can always be rebuilt from those two inputs.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from .results import GameOver, ShotResult, Sunk


def _fold(counts: Counter, result: ShotResult) -> None:
    if not isinstance(result, (Sunk, GameOver)):
        return
    if counts[result.size] <= 0:
        raise ValueError(f"sunk a ship of size {result.size} that is not in the fleet")
    counts[result.size] -= 1
    if counts[result.size] == 0:
        del counts[result.size]


def remaining_ships(sizes: Iterable[int], results: Iterable[ShotResult]) -> dict[int, int]:
    """Map ship size -> number of ships of that size not yet sunk.

    Sizes with nothing left are omitted.
    """
    counts = Counter(sizes)
    for result in results:
        _fold(counts, result)
    return dict(sorted(counts.items(), reverse=True))


class RemainingShips:
    """Incremental form of ``remaining_ships`` for a client following a game."""

    def __init__(self, sizes: Iterable[int]):
        self.sizes = tuple(sizes)
        self._counts = Counter(self.sizes)
        self.results: list[ShotResult] = []

    def apply(self, result: ShotResult) -> None:
        _fold(self._counts, result)
        self.results.append(result)

    def as_dict(self) -> dict[int, int]:
        return dict(sorted(self._counts.items(), reverse=True))

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def __bool__(self) -> bool:
        return self.total > 0

    def __repr__(self) -> str:
        return f"RemainingShips({self.as_dict()})"

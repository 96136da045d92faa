from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Hit:
    pass


@dataclass(frozen=True)
class Sunk:
    size: int


@dataclass(frozen=True)
class Miss:
    pass


@dataclass(frozen=True)
class AlreadyShot:
    pass


@dataclass(frozen=True)
class Invalid:
    pass


@dataclass(frozen=True)
class GameOver:
    size: int


ShotResult = Union[Hit, Sunk, Miss, AlreadyShot, Invalid, GameOver]


def changes_state(result: ShotResult) -> bool:
    """True for outcomes that mutated the board (everything but AlreadyShot/Invalid)."""
    return isinstance(result, (Hit, Sunk, Miss, GameOver))

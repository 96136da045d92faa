"""Wire vocabulary of the line protocol.

One UTF-8 message per line:

Server -> client
----------------
WELCOME                 sent immediately on connect
ERROR:<text>            the requested fleet could not be placed
HIT                     occupied cell hit, ship still afloat
SUNK:<size>             this shot sank a ship of <size>, others remain
MISS                    empty cell
ALREADY_SHOT            coordinate resolved before
INVALID                 out-of-bounds or unparseable shot
GAME_OVER:<size>        this shot sank the last ship

Client -> server
----------------
SHIPS:<n1>,<n2>,...     requested fleet (first line after WELCOME)
<row>,<col>             zero-based shot
quit                    end the game (any case)
"""

from __future__ import annotations

from typing import Final, Iterable

from .grid import HIT as HIT_MARK, MISS as MISS_MARK, WATER
from .results import AlreadyShot, GameOver, Hit, Invalid, Miss, ShotResult, Sunk

WELCOME: Final[str] = "WELCOME"
SHIPS_PREFIX: Final[str] = "SHIPS:"
QUIT: Final[str] = "quit"
PLACEMENT_ERROR: Final[str] = "ERROR:Too many or too large ships for the board"

HIT: Final[str] = "HIT"
SUNK: Final[str] = "SUNK"
MISS: Final[str] = "MISS"
ALREADY_SHOT: Final[str] = "ALREADY_SHOT"
INVALID: Final[str] = "INVALID"
GAME_OVER: Final[str] = "GAME_OVER"


class ProtocolError(Exception):
    """Raised when a server line is not part of the protocol."""


def format_result(result: ShotResult) -> str:
    if isinstance(result, Hit):
        return HIT
    if isinstance(result, Sunk):
        return f"{SUNK}:{result.size}"
    if isinstance(result, Miss):
        return MISS
    if isinstance(result, AlreadyShot):
        return ALREADY_SHOT
    if isinstance(result, Invalid):
        return INVALID
    if isinstance(result, GameOver):
        return f"{GAME_OVER}:{result.size}"
    raise TypeError(f"not a shot result: {result!r}")


_SIMPLE = {HIT: Hit, MISS: Miss, ALREADY_SHOT: AlreadyShot, INVALID: Invalid}
_SIZED = {SUNK: Sunk, GAME_OVER: GameOver}


def parse_result(line: str) -> ShotResult:
    raw = line.strip()
    code, sep, arg = raw.partition(":")
    if not sep and code in _SIMPLE:
        return _SIMPLE[code]()
    if sep and code in _SIZED:
        try:
            size = int(arg)
        except ValueError:
            raise ProtocolError(f"bad ship size in {raw!r}") from None
        return _SIZED[code](size)
    raise ProtocolError(f"unexpected server message: {raw!r}")


def format_ships(sizes: Iterable[int]) -> str:
    return SHIPS_PREFIX + ",".join(str(size) for size in sizes)


__all__ = [
    "WELCOME",
    "SHIPS_PREFIX",
    "QUIT",
    "PLACEMENT_ERROR",
    "HIT",
    "SUNK",
    "MISS",
    "ALREADY_SHOT",
    "INVALID",
    "GAME_OVER",
    "WATER",
    "HIT_MARK",
    "MISS_MARK",
    "ProtocolError",
    "format_result",
    "parse_result",
    "format_ships",
]

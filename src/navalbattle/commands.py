import re
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from . import config as _cfg
from .protocol import QUIT, SHIPS_PREFIX

# Zero-based "<row>,<col>", whitespace allowed around either number.
# Numbers are capped at 9 digits: anything longer is off any board, and
# int() refuses very long digit strings.
COORD_RE = re.compile(r"^\s*([+-]?\d{1,9})\s*,\s*([+-]?\d{1,9})\s*$")
SIZE_RE = re.compile(r"^\s*\+?\d{1,9}\s*$")


class CommandParseError(Exception):
    """Raised when a line cannot be parsed as a valid command."""


@dataclass(frozen=True)
class FireCommand:
    row: int
    col: int


@dataclass(frozen=True)
class QuitCommand:
    pass


Command = Union[FireCommand, QuitCommand]


def parse_ships(line: Optional[str], default: Iterable[int] = _cfg.DEFAULT_SHIPS) -> list[int]:
    """Fleet requested by a ``SHIPS:`` line, or *default* if the line is missing or malformed."""
    if line is None or not line.startswith(SHIPS_PREFIX):
        return list(default)
    items = line[len(SHIPS_PREFIX):].split(",")
    if not all(SIZE_RE.match(item) for item in items):
        return list(default)
    sizes = [int(item) for item in items]
    if any(size < 1 for size in sizes):
        return list(default)
    return sizes


def parse_command(line: str) -> Command:
    if line is None:
        raise CommandParseError("No command to parse")
    raw = line.strip()
    if not raw:
        raise CommandParseError("Empty command")
    if raw.lower() == QUIT:
        return QuitCommand()
    m = COORD_RE.match(raw)
    if not m:
        raise CommandParseError(f"Invalid coordinate: {raw[:40]}")
    return FireCommand(row=int(m.group(1)), col=int(m.group(2)))

"""Lightweight event model used by GameSession to decouple game flow from logging.

The session emits strongly-typed events that subscribers (the server's
EventLogger, tests, metrics) can consume without parsing wire text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict


class Category(Enum):
    """High-level event categories."""

    TURN = auto()  # per-shot lifecycle (placed, shot, invalid)
    SYSTEM = auto()  # connect / disconnect / timeout / end


@dataclass(slots=True)
class Event:
    """Immutable event emitted by GameSession."""

    category: Category
    type: str  # finer-grained identifier, e.g. "shot", "placed", "end"
    payload: Dict[str, Any]

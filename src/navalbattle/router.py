"""Translate GameSession events into log records.

The router lives *outside* GameSession so that what gets logged, and at which
level, is declared in one place and can evolve without touching the game
flow. It is also straight-forward to unit-test by feeding synthetic Event
objects.
"""

from __future__ import annotations

import logging

from .events import Category, Event

logger = logging.getLogger(__name__)


class EventLogger:
    """Session subscriber that converts `Event` -> `logging` calls."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def __call__(self, ev: Event) -> None:  # GameSession calls router(event)
        try:
            self.dispatch(ev)
        except Exception:  # noqa: BLE001
            self._log.exception("Event logging failed for %s", ev)

    def dispatch(self, ev: Event) -> None:
        if ev.category is Category.TURN:
            self._handle_turn(ev)
        elif ev.category is Category.SYSTEM:
            self._handle_system(ev)
        else:  # pragma: no cover – unknown category
            self._log.debug("Ignoring event %s", ev)

    # ------------------------------------------------------------------
    # Category handlers
    # ------------------------------------------------------------------
    def _handle_turn(self, ev: Event) -> None:
        p = ev.payload
        sid = p["session"]
        t = ev.type
        if t == "shot":
            self._log.info("[%d] Shot at (%d,%d): %s", sid, p["row"], p["col"], p["result"])
        elif t == "invalid":
            self._log.info("[%d] Invalid input received: %r", sid, p["line"])
        elif t == "placed":
            if p.get("defaulted"):
                self._log.info("[%d] No valid SHIPS line – using default fleet", sid)
            self._log.info("[%d] New game started with ships: %s", sid, p["sizes"])
            if self._log.isEnabledFor(logging.DEBUG):
                self._log.debug("[%d] Board configuration:\n%s", sid, "\n".join(p["rows"]))
        elif t == "placement_failed":
            self._log.info("[%d] Game creation failed for ships %s: %s", sid, p["sizes"], p["error"])
        else:
            self._log.debug("Unhandled TURN event: %s", ev)

    def _handle_system(self, ev: Event) -> None:
        p = ev.payload
        sid = p["session"]
        if ev.type == "connect":
            self._log.info("[%d] Player connected: %s", sid, p.get("addr"))
        elif ev.type == "end":
            self._log.info("[%d] Player disconnected (%s after %d shots)", sid, p["reason"], p["shots"])
        else:
            self._log.debug("Unhandled SYSTEM event: %s", ev)

"""Single-connection game session for the naval battle server.

The class in this module manages one game against one connected client.
Each session runs in its own daemon thread and owns its Game outright:
nothing is shared with other sessions, so no locking is needed.

Flow
----
1. Server sends ``WELCOME``.
2. Client sends ``SHIPS:<n1>,<n2>,...``; a missing or malformed line
   selects the default fleet.
3. The fleet is placed; if it cannot be, the server sends
   ``ERROR:Too many or too large ships for the board`` and hangs up.
4. Client sends ``<row>,<col>`` (or ``quit``); the server answers each shot
   with one result line until ``GAME_OVER``, ``quit`` or disconnect.

Every read is bounded by the session timeout; a client that stays silent
longer loses its connection.
"""

from __future__ import annotations

import contextlib
import itertools
import logging
import random
import socket
import threading
from typing import Any, Callable, Iterable, List, TextIO

from . import config as _cfg
from .commands import CommandParseError, QuitCommand, parse_command, parse_ships
from .events import Category, Event
from .game import Game
from .io_utils import read_line, send_line
from .placement import PlacementError
from .protocol import INVALID, PLACEMENT_ERROR, WELCOME, format_result
from .results import GameOver, ShotResult

logger = logging.getLogger(__name__)

_session_ids = itertools.count(1)


class GameSession(threading.Thread):
    """Thread managing a single client's game."""

    def __init__(
        self,
        conn: socket.socket,
        addr: Any = None,
        *,
        board_size: int = _cfg.BOARD_SIZE,
        attempts: int = _cfg.PLACEMENT_ATTEMPTS,
        timeout: float | None = _cfg.TIMEOUT,
        rng: random.Random | None = None,
        default_ships: Iterable[int] = _cfg.DEFAULT_SHIPS,
        session_id: int | None = None,
    ):
        """Create a thread that plays one full game over *conn*.

        Args:
            conn: Already-accepted socket (or one end of a socketpair).
            addr: Peer address, only used for logging.
            timeout: Seconds to wait for each client line; 0/None waits forever.
            rng: Random source for placement; seed it for reproducible fleets.
        """
        self.session_id = session_id if session_id is not None else next(_session_ids)
        super().__init__(name=f"session-{self.session_id}", daemon=True)
        self.conn = conn
        self.addr = addr
        self.board_size = board_size
        self.attempts = attempts
        self.timeout = timeout or None
        self.rng = rng
        self.default_ships = tuple(default_ships)

        # Populated while the game runs; inspectable after join()
        self.game: Game | None = None
        self.sizes: list[int] = []
        self.results: list[ShotResult] = []
        self.end_reason: str | None = None

        self._subs: List[Callable[[Event], None]] = []
        self._rfile: TextIO | None = None
        self._wfile: TextIO | None = None

    # -------------------- event bus --------------------
    def subscribe(self, cb: Callable[[Event], None]) -> None:
        """Allow external components (server/logger) to receive session events."""
        self._subs.append(cb)

    def _emit(self, category: Category, type_: str, **payload: Any) -> None:
        ev = Event(category, type_, {"session": self.session_id, **payload})
        for cb in tuple(self._subs):
            try:
                cb(ev)
            except Exception:
                # Don't let a misbehaving subscriber kill the game thread
                logger.exception("Subscriber failed on %s", ev)

    # -------------------- gameplay --------------------
    def run(self) -> None:
        """Main game loop executed in its own thread until the game ends."""
        reason = "error"
        try:
            self.conn.settimeout(self.timeout)
            self._rfile = self.conn.makefile("r", encoding="utf-8", errors="replace", newline="\n")
            self._wfile = self.conn.makefile("w", encoding="utf-8", newline="\n")
            self._emit(Category.SYSTEM, "connect", addr=self.addr)
            reason = self._play()
        except (socket.timeout, TimeoutError):
            logger.warning("Session %d: client idle for more than %ss – closing", self.session_id, self.timeout)
            reason = "timeout"
        except OSError as e:
            logger.warning("Session %d: connection error – %s", self.session_id, e)
            reason = "disconnect"
        except Exception:
            logger.exception("Session %d crashed", self.session_id)
            reason = "error"
        finally:
            self.end_reason = reason
            self._emit(
                Category.SYSTEM,
                "end",
                reason=reason,
                shots=self.game.shots if self.game else 0,
            )
            self._close()

    def _play(self) -> str:
        if not self._send(WELCOME):
            return "disconnect"

        line = read_line(self._rfile)
        if line is None:
            return "disconnect"
        requested = parse_ships(line, default=())
        self.sizes = requested or list(self.default_ships)

        game = Game(self.board_size, rng=self.rng, attempts=self.attempts)
        try:
            game.place(self.sizes)
        except PlacementError as e:
            self._emit(Category.TURN, "placement_failed", sizes=self.sizes, error=str(e))
            self._send(PLACEMENT_ERROR)
            return "placement_failed"
        self.game = game
        self._emit(Category.TURN, "placed", sizes=self.sizes, defaulted=not requested, rows=game.grid.rows(reveal=True))

        while True:
            line = read_line(self._rfile)
            if line is None:
                return "disconnect"
            try:
                cmd = parse_command(line)
            except CommandParseError as e:
                self._emit(Category.TURN, "invalid", line=line, error=str(e))
                if not self._send(INVALID):
                    return "disconnect"
                continue

            if isinstance(cmd, QuitCommand):
                return "quit"

            result = game.resolve(cmd.row, cmd.col)
            self.results.append(result)
            text = format_result(result)
            self._emit(Category.TURN, "shot", row=cmd.row, col=cmd.col, result=text)
            if not self._send(text):
                return "disconnect"
            if isinstance(result, GameOver):
                return "game_over"

    # -------------------- internal utilities --------------------
    def _send(self, text: str) -> bool:
        assert self._wfile is not None
        return send_line(self._wfile, text)

    def _close(self) -> None:
        for f in (self._rfile, self._wfile):
            if f is not None:
                with contextlib.suppress(OSError):
                    f.close()
        with contextlib.suppress(OSError):
            self.conn.shutdown(socket.SHUT_RDWR)
        self.conn.close()

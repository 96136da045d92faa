"""Programmatic client for the naval battle line protocol.

This is the transport half of a client only: it negotiates a fleet, fires
shots and keeps the remaining-ships tally. Prompting and board rendering are
left to whatever front-end drives it.
"""

from __future__ import annotations

import logging
import socket
from types import TracebackType
from typing import Iterable, Optional, TextIO, Type

from . import config as _cfg
from .io_utils import read_line, send_line
from .protocol import QUIT, WELCOME, ProtocolError, format_ships, parse_result
from .results import GameOver, ShotResult
from .tally import RemainingShips

HOST = _cfg.DEFAULT_HOST
PORT = _cfg.DEFAULT_PORT

logger = logging.getLogger(__name__)


class ServerError(Exception):
    """The server answered with an ``ERROR:`` line (e.g. the fleet did not fit)."""


class GameClient:
    """One connection, one game."""

    def __init__(self, sock: socket.socket) -> None:
        self.sock = sock
        self._r: TextIO = sock.makefile("r", encoding="utf-8", newline="\n")
        self._w: TextIO = sock.makefile("w", encoding="utf-8", newline="\n")
        self.remaining = RemainingShips(())
        self.game_over = False

    @classmethod
    def connect(cls, host: str = HOST, port: int = PORT, timeout: float | None = None) -> "GameClient":
        sock = socket.create_connection((host, port), timeout=timeout)
        return cls(sock)

    def __enter__(self) -> "GameClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()

    # ---------------------------- protocol -----------------------------

    def _recv(self) -> str:
        line = read_line(self._r)
        if line is None:
            raise ConnectionError("server closed the connection")
        if line.startswith("ERROR:"):
            raise ServerError(line[len("ERROR:"):])
        return line

    def _send(self, text: str) -> None:
        if not send_line(self._w, text):
            raise ConnectionError("server closed the connection")

    def start(self, sizes: Iterable[int]) -> None:
        """Wait for WELCOME and request the fleet *sizes*.

        A fleet the server cannot place is reported by the next ``fire()``
        raising ServerError.
        """
        greeting = self._recv()
        if greeting != WELCOME:
            raise ProtocolError(f"expected {WELCOME}, got {greeting!r}")
        sizes = tuple(sizes)
        # the server swaps an unusable fleet for its default one
        if not sizes or any(size < 1 for size in sizes):
            self.remaining = RemainingShips(_cfg.DEFAULT_SHIPS)
        else:
            self.remaining = RemainingShips(sizes)
        self._send(format_ships(sizes))
        logger.debug("Requested fleet %s", sizes)

    def send_raw(self, line: str) -> ShotResult:
        """Send an arbitrary shot line and return the server's verdict."""
        if not send_line(self._w, line):
            # a rejected fleet is answered with ERROR and a hang-up before we write
            self._recv()
            raise ConnectionError("server closed the connection")
        result = parse_result(self._recv())
        self.remaining.apply(result)
        if isinstance(result, GameOver):
            self.game_over = True
        logger.debug("%r -> %r", line, result)
        return result

    def fire(self, row: int, col: int) -> ShotResult:
        return self.send_raw(f"{row},{col}")

    def quit(self) -> None:
        self._send(QUIT)

    def close(self) -> None:
        for f in (self._r, self._w):
            try:
                f.close()
            except OSError:
                pass
        self.sock.close()

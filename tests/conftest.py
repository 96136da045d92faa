import logging
import random
import socket

import pytest

from navalbattle.events import Event
from navalbattle.session import GameSession

# Suppress INFO & DEBUG logs from session threads during tests
logging.basicConfig(level=logging.WARNING)


class LineClient:
    """Simple client wrapper for session tests over the line protocol."""

    def __init__(self, sock: socket.socket, timeout: float = 2.0) -> None:
        self.sock = sock
        self.sock.settimeout(timeout)
        self.r = sock.makefile("r", encoding="utf-8", newline="\n")
        self.w = sock.makefile("w", encoding="utf-8", newline="\n")

    def send(self, msg: str) -> None:
        self.w.write(msg + "\n")
        self.w.flush()

    def recv(self) -> str | None:
        """Next line without terminator, or None once the server hung up."""
        line = self.r.readline()
        return line.rstrip("\n") if line else None

    def ask(self, msg: str) -> str | None:
        self.send(msg)
        return self.recv()

    def close(self) -> None:
        for f in (self.r, self.w):
            try:
                f.close()
            except OSError:
                pass
        self.sock.close()


@pytest.fixture
def session_factory():
    """Factory that starts a GameSession on a socketpair and returns (client, session, events)."""
    started: list[tuple[LineClient, GameSession]] = []

    def _factory(seed: int = 7, **kwargs):
        srv, cli = socket.socketpair()
        kwargs.setdefault("board_size", 5)
        kwargs.setdefault("timeout", 5)
        sess = GameSession(srv, "test-peer", rng=random.Random(seed), **kwargs)
        events: list[Event] = []
        sess.subscribe(events.append)
        sess.start()
        client = LineClient(cli)
        started.append((client, sess))
        return client, sess, events

    yield _factory

    for client, sess in started:
        client.close()
        sess.join(timeout=2.0)

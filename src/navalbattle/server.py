"""Naval battle TCP server.

Accepts connections forever and hands each one to its own GameSession
thread. Sessions share nothing, so any number of games can run at once.
"""

from __future__ import annotations

import argparse
import logging
import signal
import socket
import sys
import threading
from typing import Optional

from . import config as _cfg
from .router import EventLogger
from .session import GameSession

HOST = _cfg.DEFAULT_HOST
PORT = _cfg.DEFAULT_PORT

# Initialize module-level logger
logger = logging.getLogger(__name__)

# How often the accept loop wakes up to check the stop flag
_ACCEPT_POLL = 0.5


def serve(
    host: str = HOST,
    port: int = PORT,
    *,
    board_size: int = _cfg.BOARD_SIZE,
    attempts: int = _cfg.PLACEMENT_ATTEMPTS,
    timeout: float | None = _cfg.TIMEOUT,
    ready: Optional[threading.Event] = None,
    stop: Optional[threading.Event] = None,
) -> None:
    """Run the accept loop until *stop* is set (or forever).

    *ready* is set once the socket is listening, with the bound port stored
    on it as ``ready.port`` (handy together with port 0).
    """
    event_logger = EventLogger()
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server_sock:
        server_sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        server_sock.bind((host, port))
        server_sock.listen()
        if stop is not None:
            server_sock.settimeout(_ACCEPT_POLL)
        bound_host, bound_port = server_sock.getsockname()[:2]
        logger.info("Naval battle server listening on %s:%d (board %dx%d)", bound_host, bound_port, board_size, board_size)
        if ready is not None:
            ready.port = bound_port  # type: ignore[attr-defined]
            ready.set()

        while stop is None or not stop.is_set():
            try:
                conn, addr = server_sock.accept()
            except socket.timeout:
                continue
            # accepted sockets inherit the listener's timeout; the session sets its own
            conn.settimeout(None)
            sess = GameSession(
                conn,
                addr,
                board_size=board_size,
                attempts=attempts,
                timeout=timeout,
            )
            sess.subscribe(event_logger)
            sess.start()
        logger.info("Server stopped")


def main(argv: list[str] | None = None) -> None:
    """Command-line entry point: ``naval-server`` / ``python -m navalbattle.server``."""
    parser = argparse.ArgumentParser(description="Naval battle server")
    parser.add_argument("--host", default=HOST, help=f"Bind address (default {HOST}).")
    parser.add_argument("--port", type=int, default=PORT, help=f"TCP port (default {PORT}).")
    parser.add_argument(
        "--board-size",
        type=int,
        default=_cfg.BOARD_SIZE,
        help="Width and height of the board.",
    )
    parser.add_argument(
        "--attempts",
        type=int,
        default=_cfg.PLACEMENT_ATTEMPTS,
        help="Whole-board placement attempts before giving up on a fleet.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=_cfg.TIMEOUT,
        help="Seconds to wait for each client line (0 disables).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity.",
    )
    parser.add_argument(
        "-s",
        "--silent",
        "-q",
        "--quiet",
        dest="silent",
        action="store_true",
        help="Suppress all output.",
    )
    args = parser.parse_args(argv)

    if args.board_size < 1:
        parser.error("--board-size must be positive")
    if args.attempts < 1:
        parser.error("--attempts must be at least 1")
    if args.timeout < 0:
        parser.error("--timeout must not be negative (0 disables it)")
    if not 0 <= args.port <= 65535:
        parser.error("--port must be between 0 and 65535")

    # Determine log level from CLI flags:
    if args.silent:
        level = logging.ERROR
    elif args.debug or _cfg.DEBUG:
        level = logging.DEBUG
    elif args.verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    stop = threading.Event()

    # install graceful shutdown handler
    def _shutdown(signum, frame):
        # ensure the "^C" echo doesn't get stuck on our log line
        sys.stderr.write("\n")
        logger.info("Received signal %s, shutting down", signum)
        stop.set()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    serve(
        args.host,
        args.port,
        board_size=args.board_size,
        attempts=args.attempts,
        timeout=args.timeout,
        stop=stop,
    )


if __name__ == "__main__":  # pragma: no cover
    main()

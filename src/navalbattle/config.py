"""Central configuration for runtime-tunable parameters.

All constants can be overridden via environment variables so that the
server runs with the classic 5x5 board by default, while the automated
test-suite (or an operator) can pick another port, board or timeout.
"""

from __future__ import annotations

import os


# ===========================================================================
# Network Defaults
# ===========================================================================
# NAVAL_HOST: Default host address for the server to bind to and clients to connect to.
#   Defaults to "127.0.0.1".
#   Example: export NAVAL_HOST=0.0.0.0
DEFAULT_HOST: str = os.getenv("NAVAL_HOST", "127.0.0.1")

# NAVAL_PORT: Default port for the server to listen on and clients to connect to.
#   Defaults to 5000, the port existing clients of the protocol expect.
#   Note: Port 5000 is used by another process on macOS, override it there.
#   Example: export NAVAL_PORT=5001
DEFAULT_PORT: int = int(os.getenv("NAVAL_PORT", "5000"))


# ===========================================================================
# Turn Timeout
# ===========================================================================
# NAVAL_TIMEOUT: seconds the server waits for each client line before failing
#   the connection. "0" disables the timeout (block forever).
#   Defaults to 60 seconds. Example: export NAVAL_TIMEOUT=30
TIMEOUT: float = float(os.getenv("NAVAL_TIMEOUT", "60"))


# ===========================================================================
# Game Constants
# ===========================================================================
# NAVAL_BOARD_SIZE: Defines the width and height of the game board.
#   Defaults to 5 (for a 5x5 grid).
#   Example: export NAVAL_BOARD_SIZE=8
BOARD_SIZE: int = int(os.getenv("NAVAL_BOARD_SIZE", "5"))

# NAVAL_PLACEMENT_ATTEMPTS: number of whole-board attempts the placement engine
#   makes before giving up on a fleet.
#   Defaults to 100.
PLACEMENT_ATTEMPTS: int = int(os.getenv("NAVAL_PLACEMENT_ATTEMPTS", "100"))

# Fleet used when a client sends no (or a malformed) SHIPS line. Not overridden by env vars.
DEFAULT_SHIPS: tuple[int, ...] = (3, 2, 1)


# ===========================================================================
# Debugging and Logging
# ===========================================================================
# NAVAL_DEBUG: If "1", enables detailed debug logging (including each new
#   fleet layout) across modules.
#   Defaults to "0" (disabled).
#   Example: export NAVAL_DEBUG=1
DEBUG: bool = os.getenv("NAVAL_DEBUG", "0") == "1"

# io_utils.py
"""
Low-level line helpers shared by GameSession and GameClient
–––––––––––––––––––––––––––––––––––––––––––––––––––––––––––
• send_line() – write one protocol line + flush
• read_line() – readline() that maps EOF / reset to None
"""

from typing import Optional, TextIO
import logging

logger = logging.getLogger("navalbattle.io_utils")


def send_line(w: TextIO, text: str) -> bool:
    """Write *text* as one line; return False if the peer has gone away."""
    logger.debug("send_line() %r", text)
    try:
        w.write(text + "\n")
        w.flush()
        return True
    except (BrokenPipeError, ConnectionResetError, ConnectionAbortedError):
        # peer closed or reset during send
        return False
    except OSError as e:
        if isinstance(e, TimeoutError):
            raise
        logger.debug("send_line() failed – %s", e)
        return False


def read_line(r: TextIO) -> Optional[str]:
    """Read one line without its terminator; None on EOF or connection reset.

    Read timeouts are not swallowed: the caller decides what a silent peer means.
    """
    try:
        line = r.readline()
    except (ConnectionResetError, ConnectionAbortedError) as e:
        logger.debug("read_line() error – %s", e)
        return None
    if not line:
        logger.debug("read_line() EOF")
        return None
    line = line.rstrip("\r\n")
    logger.debug("read_line() got line %r", line)
    return line

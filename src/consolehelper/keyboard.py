"""Keyboard access for interactive waits.

Provides a non-blocking "is a key waiting?" check, a read of keys that are
already pending, and readchar's blocking single-key read.
"""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager

import readchar

# Platform-specific imports
if os.name == "nt":
    import msvcrt
else:
    import select
    import termios

# Enough for any escape sequence a single key press produces
PENDING_READ_SIZE = 32


class Keyboard:
    """Key source backed by the real terminal."""

    def available(self) -> bool:
        """Non-blocking check whether a key is waiting in the input buffer."""
        if os.name == "nt":
            return bool(msvcrt.kbhit())
        ready, _, _ = select.select([sys.stdin], [], [], 0)
        return bool(ready)

    def read(self) -> str:
        """Block until a key is pressed and return it.

        readchar switches the terminal mode with TCSAFLUSH, which discards
        input that is already queued. Use read_pending() for those keys.
        """
        return readchar.readkey()

    def read_pending(self) -> str | None:
        """Return a key that is already in the input buffer, None if there is none.

        Never blocks and never discards other queued input.
        """
        if os.name == "nt":
            if not msvcrt.kbhit():
                return None
            key = msvcrt.getwch()
            # Function and arrow keys arrive as a prefix plus a scan code
            if key in ("\x00", "\xe0"):
                key += msvcrt.getwch()
            return key

        fd = sys.stdin.fileno()
        ready, _, _ = select.select([fd], [], [], 0)
        if not ready:
            return None
        data = os.read(fd, PENDING_READ_SIZE)
        if not data:
            # End of input
            return None
        return data.decode("utf-8", errors="replace")

    @contextmanager
    def session(self):
        """Cbreak mode with echo disabled for the duration of a wait (Unix only).

        Without it, pending keys only become visible to the non-blocking check
        after Enter. No-op on Windows or when stdin is not a terminal.
        """
        if os.name == "nt":
            yield
            return

        try:
            fd = sys.stdin.fileno()
            old_settings = termios.tcgetattr(fd)
        except (AttributeError, OSError, ValueError, termios.error):
            yield
            return

        try:
            new_settings = termios.tcgetattr(fd)
            # Disable echo and canonical mode (line buffering)
            new_settings[3] = new_settings[3] & ~(termios.ECHO | termios.ICANON)
            new_settings[6][termios.VMIN] = 1
            new_settings[6][termios.VTIME] = 0
            termios.tcsetattr(fd, termios.TCSANOW, new_settings)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

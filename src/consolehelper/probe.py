"""Detection of redirected standard streams.

A stream counts as redirected when it is attached to a file, a pipe or the
null device instead of an interactive terminal. Cursor movement, window
geometry and key polling are only used when the matching stream is a real
terminal.
"""

from __future__ import annotations

import logging
import os
import stat
import sys
from dataclasses import dataclass
from typing import IO

logger = logging.getLogger(__name__)

# Standard device identifiers for GetStdHandle
STD_INPUT_HANDLE = -10
STD_OUTPUT_HANDLE = -11

FILE_TYPE_CHAR = 0x0002


def _windows_stream_redirected(handle_id: int) -> bool:
    import ctypes

    kernel32 = ctypes.windll.kernel32
    kernel32.GetStdHandle.restype = ctypes.c_void_p
    kernel32.GetFileType.argtypes = [ctypes.c_void_p]
    kernel32.GetConsoleMode.argtypes = [ctypes.c_void_p, ctypes.POINTER(ctypes.c_ulong)]

    handle = kernel32.GetStdHandle(handle_id)
    if kernel32.GetFileType(handle) != FILE_TYPE_CHAR:
        return True
    # "nul" is a character device too, but has no console mode
    mode = ctypes.c_ulong()
    return not kernel32.GetConsoleMode(handle, ctypes.byref(mode))


def _posix_stream_redirected(stream: IO | None) -> bool:
    import termios

    if stream is None:
        return True
    fd = stream.fileno()
    if not stat.S_ISCHR(os.fstat(fd).st_mode):
        return True
    # /dev/null is a character device too, but has no terminal attributes
    try:
        termios.tcgetattr(fd)
    except termios.error:
        return True
    return False


def is_stream_redirected(stream: IO | None, handle_id: int) -> bool:
    """Check whether a standard stream is redirected.

    Args:
        stream: The Python stream object (used on POSIX).
        handle_id: The Windows standard device identifier.

    Returns:
        True if the stream is not an interactive terminal. Any failure to
        query the stream is treated as redirected.
    """
    try:
        if os.name == "nt":
            return _windows_stream_redirected(handle_id)
        return _posix_stream_redirected(stream)
    except (ImportError, AttributeError, OSError, ValueError) as e:
        # Replaced streams (no fileno), closed descriptors, missing primitives
        logger.debug(f"Stream probe for handle {handle_id} failed, assuming redirected: {e}")
        return True


@dataclass(frozen=True)
class RedirectionState:
    """Redirection flags for standard input and output.

    Stream redirection is fixed at process start, so the flags are detected
    once and never change afterwards.
    """

    input_redirected: bool
    output_redirected: bool

    @classmethod
    def detect(cls) -> RedirectionState:
        """Probe stdin and stdout of the current process."""
        state = cls(
            input_redirected=is_stream_redirected(sys.stdin, STD_INPUT_HANDLE),
            output_redirected=is_stream_redirected(sys.stdout, STD_OUTPUT_HANDLE),
        )
        logger.debug(
            f"Redirection detected: input={state.input_redirected} "
            f"output={state.output_redirected}"
        )
        return state


def is_input_redirected() -> bool:
    """Return whether stdin of the current process is redirected."""
    from .terminal import get_terminal

    return get_terminal().input_redirected


def is_output_redirected() -> bool:
    """Return whether stdout of the current process is redirected."""
    from .terminal import get_terminal

    return get_terminal().output_redirected

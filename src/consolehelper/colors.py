"""Scoped color changes and error reporting."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from .cursor import clear_line
from .interaction import wait_if_debug
from .terminal import Terminal, get_terminal


@contextmanager
def color_scope(color: str, term: Terminal | None = None) -> Iterator[Terminal]:
    """Change the text color and change it back again on exit.

    The previous color is restored even if the block raises.

    Example:
        with color_scope("red") as term:
            term.write_error("Something failed\\n")
    """
    term = term or get_terminal()
    previous_color = term.foreground
    term.foreground = color
    try:
        yield term
    finally:
        term.foreground = previous_color


def exit_error(message: str, exit_code: int, term: Terminal | None = None) -> int:
    """Write an error message in the error color, wait for a key if debugging
    and return the exit code for passing it directly to sys.exit() or return.
    """
    term = term or get_terminal()
    clear_line(term)
    with color_scope(term.config["error_color"], term):
        term.write_error(message + "\n")
    wait_if_debug(term)
    return exit_code

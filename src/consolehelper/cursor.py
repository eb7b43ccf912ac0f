"""Cursor movement and line clearing within the current line."""

from __future__ import annotations

from .terminal import Terminal, get_terminal


def move_cursor(count: int, term: Terminal | None = None) -> None:
    """Move the cursor in the current line.

    Positive values move to the right, negative to the left. The target
    column is clamped to the window. Does nothing when output is redirected.
    """
    term = term or get_terminal()
    if term.output_redirected:
        return

    width = term.window_width
    x = term.column + count
    if x < 0:
        x = 0
    if x >= width:
        x = width - 1
    term.column = x


def clear_line(term: Terminal | None = None) -> None:
    """Clear the current line and move the cursor to the first column.

    Redirected output has no cursor, so a line break is written instead.
    """
    term = term or get_terminal()
    if term.output_redirected:
        term.write_line()
        return

    term.column = 0
    term.write(" " * (term.window_width - 1))
    term.column = 0

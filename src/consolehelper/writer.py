"""Colorized and wrapped output.

Formatted output runs every character through a formatter that decides
whether the character is shown and in which colors. This allows inline
control characters to switch colors without appearing in the output:

    formatter = control_formatter({"\\x01": "green", "\\x02": None})
    write_formatted("Status: \\x01OK\\x02\\n", formatter)

Note: wrapped formatted output is wrapped before the formatter runs, so
characters that the formatter hides still take up room when line breaks are
chosen. Text with many hidden characters may wrap earlier than needed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .layout import format_wrapped, split_lines
from .terminal import Terminal, get_terminal


@dataclass(frozen=True)
class CharFormat:
    """Decision for a single character of formatted output.

    Attributes:
        emit: Whether the character is written at all.
        foreground: Text color to switch to before the character, None to
            keep the current color.
        background: Background color to switch to before the character, None
            to keep the current color.
    """

    emit: bool = True
    foreground: str | None = None
    background: str | None = None


Formatter = Callable[[str], CharFormat]

SHOW = CharFormat()
HIDE = CharFormat(emit=False)


def write_formatted(text: str, formatter: Formatter, term: Terminal | None = None) -> None:
    """Write text through a formatter. The previous colors are restored.

    Args:
        text: The text to write.
        formatter: Called for every character; returns the CharFormat that
            sets the colors and decides whether the character is shown.
        term: Terminal to write to (process-wide terminal if None).
    """
    term = term or get_terminal()
    old_foreground = term.foreground
    old_background = term.background
    pending: list[str] = []
    try:
        for ch in text:
            fmt = formatter(ch)
            changes_color = (
                fmt.foreground is not None and fmt.foreground != term.foreground
            ) or (fmt.background is not None and fmt.background != term.background)
            if changes_color:
                # Flush the run written in the previous colors
                term.write("".join(pending))
                pending.clear()
                if fmt.foreground is not None:
                    term.foreground = fmt.foreground
                if fmt.background is not None:
                    term.background = fmt.background
            if fmt.emit:
                pending.append(ch)
        term.write("".join(pending))
    finally:
        term.foreground = old_foreground
        term.background = old_background


def write_wrapped(text: str, table_mode: bool = False, term: Terminal | None = None) -> None:
    """Write text wrapped to the window width, keeping each line's indenting.

    Args:
        text: The text to write, may contain line breaks.
        table_mode: Indents to the last occurrence of two spaces; otherwise
            indents to leading spaces.
        term: Terminal to write to (process-wide terminal if None).
    """
    term = term or get_terminal()
    width = term.window_width
    for line in split_lines(text):
        term.write(format_wrapped(line, width, table_mode))


def write_wrapped_formatted(
    text: str,
    formatter: Formatter,
    table_mode: bool = False,
    term: Terminal | None = None,
) -> None:
    """Write wrapped text through a formatter. The previous colors are restored."""
    term = term or get_terminal()
    width = term.window_width
    for line in split_lines(text):
        write_formatted(format_wrapped(line, width, table_mode), formatter, term)


def control_formatter(palette: dict[str, str | None]) -> Formatter:
    """Build a formatter that switches the text color on marker characters.

    Args:
        palette: Maps marker characters to Rich color names. A marker mapped
            to None switches back to the terminal's default color. Markers are
            never shown.
    """

    def formatter(ch: str) -> CharFormat:
        if ch in palette:
            return CharFormat(emit=False, foreground=palette[ch] or "default")
        return SHOW

    return formatter

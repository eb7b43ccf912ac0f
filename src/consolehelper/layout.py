"""Width-aware line wrapping.

Wrapped lines keep the indenting of the first line so that hanging-indent
and table-style text stays aligned:

    >>> print(format_wrapped("  key: value that is long", 15), end="")
      key: value
      that is long

Table mode aligns continuation lines to the column after the last run of two
spaces, which suits "name  description" style listings.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

FALLBACK_WIDTH = 80
MIN_WRAP_WIDTH = 2


def infer_indent(text: str, table_mode: bool = False) -> int:
    """Return the indent used for continuation lines of ``text``.

    Args:
        text: The line to inspect.
        table_mode: Indent to the last occurrence of two spaces instead of
            counting leading spaces.
    """
    if table_mode:
        pos = text.rfind("  ")
        return pos + 2 if pos != -1 else 0
    return len(text) - len(text.lstrip(" "))


def split_lines(text: str) -> list[str]:
    """Split text on line breaks and strip trailing whitespace from each line."""
    return [line.rstrip() for line in text.split("\n")]


def format_wrapped(text: str, width: int, table_mode: bool = False) -> str:
    """Wrap a single line of text to the given width.

    Wraps at spaces whenever possible and indents every following line like
    the first one. Words longer than a line are broken at the width.

    Args:
        text: The input line (must not contain line breaks).
        width: The available width in columns.
        table_mode: Indents to the last occurrence of two spaces; otherwise
            indents to the leading spaces.

    Returns:
        The wrapped text, every line terminated by a line break.
    """
    if not text.rstrip():
        return "\n"

    if width < MIN_WRAP_WIDTH:
        logger.debug(f"Wrap width {width} too small, using {MIN_WRAP_WIDTH}")
        width = MIN_WRAP_WIDTH

    indent = infer_indent(text, table_mode)
    indent_str = " " * indent

    lines: list[str] = []
    remaining = text
    have_reduced_width = False
    while remaining:
        pos = width - 1
        if pos >= len(remaining):
            lines.append(remaining)
            break

        while pos > 0 and remaining[pos] != " ":
            pos -= 1
        if pos == 0:
            # No space to wrap at, break inside the word
            pos = width - 1
            lines.append(remaining[:pos])
            remaining = remaining[pos:]
        else:
            lines.append(remaining[:pos])
            remaining = remaining[pos + 1:]

        # Continuation lines lose the indent width, once
        if remaining and not have_reduced_width:
            width = max(MIN_WRAP_WIDTH, width - indent)
            have_reduced_width = True

    output = lines[0] + "\n"
    for line in lines[1:]:
        output += indent_str + line + "\n"
    return output

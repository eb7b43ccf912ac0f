"""Redirection-aware console output and interaction.

Wrapped and colorized output, cursor control within a line, and "press any
key" waits that stay correct when stdin or stdout is redirected.

Example:
    from consolehelper import color_scope, wait, write_wrapped

    write_wrapped("  --width N  Wrap to N columns instead of the window width", table_mode=True)
    with color_scope("yellow") as term:
        term.write_line("Nothing to do.")
    wait(timeout=5, show_dots=True)
"""

__version__ = "0.3.0"

from .colors import color_scope, exit_error
from .cursor import clear_line, move_cursor
from .interaction import KeyWaiter, WaitState, clear_key_buffer, wait, wait_if_debug
from .keys import is_input_key
from .layout import FALLBACK_WIDTH, format_wrapped, infer_indent
from .probe import RedirectionState, is_input_redirected, is_output_redirected
from .terminal import Terminal, get_terminal, set_terminal
from .writer import (
    CharFormat,
    control_formatter,
    write_formatted,
    write_wrapped,
    write_wrapped_formatted,
)

__all__ = [
    "__version__",
    # Terminal
    "Terminal",
    "get_terminal",
    "set_terminal",
    # Redirection
    "RedirectionState",
    "is_input_redirected",
    "is_output_redirected",
    # Layout
    "FALLBACK_WIDTH",
    "format_wrapped",
    "infer_indent",
    # Cursor
    "move_cursor",
    "clear_line",
    # Output
    "CharFormat",
    "control_formatter",
    "write_formatted",
    "write_wrapped",
    "write_wrapped_formatted",
    # Colors
    "color_scope",
    "exit_error",
    # Interaction
    "KeyWaiter",
    "WaitState",
    "clear_key_buffer",
    "is_input_key",
    "wait",
    "wait_if_debug",
]

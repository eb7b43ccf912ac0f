"""Terminal session state shared by all consolehelper output and input.

A Terminal bundles the Rich consoles for stdout and stderr, the redirection
flags detected at startup, the tracked cursor column, the current colors and
the key source.
"""

from __future__ import annotations

import bdb
import os
import sys
from typing import Any

from rich.color import Color
from rich.console import Console
from rich.control import Control
from rich.style import Style

from .config import load_config
from .keyboard import Keyboard
from .probe import RedirectionState

# Modules of IDE debuggers that install a plain trace function
DEBUGGER_MODULES = ("pydevd", "debugpy")


class Terminal:
    """Stdout/stderr/keyboard session with redirection-aware geometry.

    Args:
        console: Rich Console for standard output (auto-created if None).
        error_console: Rich Console for standard error (auto-created if None).
        keyboard: Key source with available(), read() and session().
        redirection: Redirection flags (detected once if None).
        config: Settings dict as returned by load_config() (loaded if None).
    """

    def __init__(
        self,
        console: Console | None = None,
        error_console: Console | None = None,
        keyboard: Any | None = None,
        redirection: RedirectionState | None = None,
        config: dict[str, Any] | None = None,
    ):
        self.console = console or Console(highlight=False, soft_wrap=True)
        self.error_console = error_console or Console(stderr=True, highlight=False, soft_wrap=True)
        self.keyboard = keyboard or Keyboard()
        self.redirection = redirection or RedirectionState.detect()
        self.config = config if config is not None else load_config()
        self._column = 0
        self._foreground: str | None = None
        self._background: str | None = None

    # Redirection

    @property
    def input_redirected(self) -> bool:
        return self.redirection.input_redirected

    @property
    def output_redirected(self) -> bool:
        return self.redirection.output_redirected

    # Geometry

    @property
    def window_width(self) -> int:
        """Terminal width, or the configured fallback width when redirected."""
        if self.output_redirected:
            return self.config["fallback_width"]
        return self.console.width

    @property
    def column(self) -> int:
        """Current cursor column, tracked from everything written."""
        return self._column

    @column.setter
    def column(self, value: int) -> None:
        self._column = value
        self.console.control(Control.move_to_column(value))

    def _advance(self, text: str) -> None:
        last_break = max(text.rfind("\n"), text.rfind("\r"))
        if last_break != -1:
            self._column = len(text) - last_break - 1
        else:
            self._column += len(text)
        width = self.window_width
        if width > 0 and self._column >= width:
            self._column %= width

    # Colors

    @property
    def foreground(self) -> str | None:
        """Current text color as a Rich color name, None for the default."""
        return self._foreground

    @foreground.setter
    def foreground(self, color: str | None) -> None:
        if color is not None:
            Color.parse(color)
        self._foreground = color

    @property
    def background(self) -> str | None:
        """Current background color as a Rich color name, None for the default."""
        return self._background

    @background.setter
    def background(self, color: str | None) -> None:
        if color is not None:
            Color.parse(color)
        self._background = color

    def _style(self) -> Style | None:
        if self._foreground is None and self._background is None:
            return None
        return Style(color=self._foreground, bgcolor=self._background)

    # Output

    def write(self, text: str) -> None:
        """Write text to stdout in the current colors."""
        if not text:
            return
        self.console.out(text, style=self._style(), end="", highlight=False)
        self._advance(text)

    def write_line(self, text: str = "") -> None:
        """Write text followed by a line break."""
        self.write(text + "\n")

    def write_error(self, text: str) -> None:
        """Write text to stderr in the current colors."""
        self.error_console.out(text, style=self._style(), end="", highlight=False)

    # Input

    def key_available(self) -> bool:
        return self.keyboard.available()

    def read_key(self) -> str:
        return self.keyboard.read()

    def read_pending_key(self) -> str | None:
        """Return an already pressed key without blocking, None if there is none."""
        return self.keyboard.read_pending()

    def key_input(self):
        """Context manager putting the keyboard into unbuffered no-echo mode."""
        return self.keyboard.session()

    # Environment

    @property
    def is_interactive(self) -> bool:
        """Whether a user can be expected to answer prompts."""
        configured = self.config.get("interactive")
        if configured is not None:
            return bool(configured)
        if os.environ.get("CI"):
            return False
        return sys.stdin is not None

    def debugger_attached(self) -> bool:
        """Whether a debugger is tracing this process.

        Coverage tools and profilers also install trace functions, so a trace
        function alone does not count.
        """
        monitoring = getattr(sys, "monitoring", None)
        if monitoring is not None and monitoring.get_tool(monitoring.DEBUGGER_ID) is not None:
            return True
        trace = sys.gettrace()
        if trace is None:
            return False
        # pdb and other bdb-based debuggers trace with a bound Bdb method
        if isinstance(getattr(trace, "__self__", None), bdb.Bdb):
            return True
        return any(name in sys.modules for name in DEBUGGER_MODULES)


# Process-wide terminal, created on first use
# Tests can call set_terminal() to inject a terminal with captured output
_terminal_instance: Terminal | None = None


def get_terminal() -> Terminal:
    """Get the process-wide terminal, creating it if needed."""
    global _terminal_instance
    if _terminal_instance is None:
        _terminal_instance = Terminal()
    return _terminal_instance


def set_terminal(new_terminal: Terminal | None) -> None:
    """Set the process-wide terminal (for testing).

    Args:
        new_terminal: Terminal to use, or None to reset to default.

    Example:
        from io import StringIO
        from rich.console import Console
        from consolehelper import Terminal, set_terminal
        from consolehelper.probe import RedirectionState

        output = StringIO()
        set_terminal(Terminal(
            console=Console(file=output, force_terminal=True, width=40),
            redirection=RedirectionState(False, False),
        ))
        # ... run code ...
        set_terminal(None)  # Reset
    """
    global _terminal_instance
    _terminal_instance = new_terminal

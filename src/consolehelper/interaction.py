"""Blocking "press any key" waits and countdowns.

Waits only happen in interactive sessions with a real keyboard on stdin.
When input is redirected (piped, read from a file, run by a scheduler) every
wait returns immediately without printing anything.
"""

from __future__ import annotations

import logging
import time
from enum import Enum

from .cursor import clear_line, move_cursor
from .keys import is_input_key
from .terminal import Terminal, get_terminal

logger = logging.getLogger(__name__)


class WaitState(Enum):
    """States of a key wait."""

    IDLE = "idle"
    WAITING_FOR_KEY = "waiting_for_key"
    COUNTING_DOWN = "counting_down"
    DONE = "done"


def clear_key_buffer(term: Terminal | None = None) -> None:
    """Drop any keys that have been pressed but not yet read."""
    term = term or get_terminal()
    if term.input_redirected:
        return
    while term.read_pending_key() is not None:
        pass


class KeyWaiter:
    """Waits for a key press, optionally with a visible countdown.

    Args:
        term: Terminal to read from and write to.
        message: Text shown before waiting. None shows the configured default
            message, an empty string shows nothing.
        timeout: Seconds until the wait ends without a key. Negative waits
            without limit.
        show_dots: Show a dot for every second of the timeout, removing one
            dot each second.
    """

    def __init__(
        self,
        term: Terminal,
        message: str | None = None,
        timeout: int = -1,
        show_dots: bool = False,
    ):
        self.term = term
        self.message = term.config["wait_message"] if message is None else message
        self.timeout = timeout
        self.show_dots = show_dots
        self.state = WaitState.IDLE

    def run(self) -> bool:
        """Perform the wait.

        Returns:
            True if a key ended the wait, False on timeout or when skipped.
        """
        term = self.term
        if not term.is_interactive or term.input_redirected:
            logger.debug("Skipping key wait: session is not interactive or input is redirected")
            self.state = WaitState.DONE
            return False

        if self.message:
            clear_line(term)
            term.write(self.message)

        with term.key_input():
            clear_key_buffer(term)
            if self.timeout < 0:
                self.state = WaitState.WAITING_FOR_KEY
                pressed = self._wait_for_key()
            else:
                self.state = WaitState.COUNTING_DOWN
                pressed = self._count_down()
                clear_key_buffer(term)

        if self.timeout >= 0 and self.message:
            term.write_line()

        self.state = WaitState.DONE
        return pressed

    def _wait_for_key(self) -> bool:
        while True:
            try:
                key = self.term.read_key()
            except (KeyboardInterrupt, EOFError):
                return True
            if is_input_key(key):
                return True

    def _key_pressed(self) -> bool:
        """Consume pending keys until a real input key is found."""
        while True:
            try:
                key = self.term.read_pending_key()
            except (KeyboardInterrupt, EOFError):
                return True
            if key is None:
                return False
            if is_input_key(key):
                return True

    def _count_down(self) -> bool:
        term = self.term
        if self.show_dots:
            term.write("." * self.timeout)

        timeout_ms = self.timeout * 1000
        step = term.config["poll_interval_ms"]
        elapsed = 0
        next_second = 1000
        while True:
            if self._key_pressed():
                return True
            if elapsed >= timeout_ms:
                return False
            time.sleep(step / 1000)
            elapsed += step
            if self.show_dots and elapsed >= next_second:
                next_second += 1000
                move_cursor(-1, term)
                term.write(" ")
                move_cursor(-1, term)


def wait(
    message: str | None = None,
    timeout: int = -1,
    show_dots: bool = False,
    term: Terminal | None = None,
) -> bool:
    """Wait for the user to press any key if interactive and input is not redirected.

    Args:
        message: The message to display. If None, a standard message is
            displayed; an empty string displays nothing.
        timeout: The time in seconds until the method returns even if no key
            was pressed. If negative, the timeout is infinite.
        show_dots: Show a dot for every second of the timeout, removing one
            dot each second.
        term: Terminal to use (process-wide terminal if None).

    Returns:
        True if a key ended the wait.
    """
    return KeyWaiter(term or get_terminal(), message, timeout, show_dots).run()


def wait_if_debug(term: Terminal | None = None) -> bool:
    """Wait for a key press, but only while a debugger is attached.

    Call at the end of a program to keep its console window open when it was
    started from a debugger, which closes the window as soon as the program
    exits.
    """
    term = term or get_terminal()
    if not term.debugger_attached():
        return False
    return wait(term.config["quit_message"], term=term)

"""Pytest fixtures for consolehelper tests."""

import copy
import io
from collections import deque
from contextlib import contextmanager

import pytest
from rich.console import Console

from consolehelper.config import DEFAULT_CONFIG
from consolehelper.probe import RedirectionState
from consolehelper.terminal import Terminal, set_terminal


class FakeKeyboard:
    """Scripted key source.

    pending: keys already in the input buffer (returned by read_pending()).
    incoming: keys a blocking read() receives once the buffer is empty.
    Exceptions in either queue are raised instead of returned.
    """

    def __init__(self, pending=(), incoming=()):
        self.pending = deque(pending)
        self.incoming = deque(incoming)
        self.reads = []
        self.sessions = 0

    def available(self):
        return bool(self.pending)

    def read(self):
        if self.pending:
            key = self.pending.popleft()
        elif self.incoming:
            key = self.incoming.popleft()
        else:
            raise AssertionError("read() called with no keys left")
        if isinstance(key, BaseException):
            raise key
        self.reads.append(key)
        return key

    def read_pending(self):
        if not self.pending:
            return None
        key = self.pending.popleft()
        if isinstance(key, BaseException):
            raise key
        self.reads.append(key)
        return key

    @contextmanager
    def session(self):
        self.sessions += 1
        yield


@pytest.fixture
def make_terminal():
    """Factory for terminals with captured stdout/stderr.

    Output goes to StringIO buffers reachable as term.console.file and
    term.error_console.file. Colors are not rendered.
    """

    def _make(
        width=40,
        input_redirected=False,
        output_redirected=False,
        interactive=True,
        keyboard=None,
        **config_overrides,
    ):
        config = copy.deepcopy(DEFAULT_CONFIG)
        config["interactive"] = interactive
        config.update(config_overrides)
        return Terminal(
            console=Console(
                file=io.StringIO(),
                width=width,
                force_terminal=not output_redirected,
                color_system=None,
                highlight=False,
                soft_wrap=True,
            ),
            error_console=Console(
                file=io.StringIO(),
                width=width,
                color_system=None,
                highlight=False,
                soft_wrap=True,
            ),
            keyboard=keyboard if keyboard is not None else FakeKeyboard(),
            redirection=RedirectionState(
                input_redirected=input_redirected,
                output_redirected=output_redirected,
            ),
            config=config,
        )

    return _make


@pytest.fixture
def default_terminal(make_terminal):
    """Install a captured terminal as the process-wide terminal."""
    term = make_terminal(output_redirected=True, interactive=False)
    set_terminal(term)
    yield term
    set_terminal(None)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the config dir at a temp directory and clear env overrides."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    for name in ("CONSOLEHELPER_WIDTH", "CONSOLEHELPER_POLL_MS", "CONSOLEHELPER_INTERACTIVE"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "consolehelper"


@pytest.fixture
def fake_keyboard():
    """Factory for scripted key sources."""
    return FakeKeyboard

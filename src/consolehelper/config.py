"""Configuration management for consolehelper."""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

from .layout import FALLBACK_WIDTH

logger = logging.getLogger(__name__)

# Default config
DEFAULT_CONFIG: dict[str, Any] = {
    "fallback_width": FALLBACK_WIDTH,  # Used when output is redirected
    "poll_interval_ms": 100,
    "wait_message": "Press any key to continue...",
    "quit_message": "Press any key to quit...",
    "error_color": "red",
    "interactive": None,  # None = auto-detect
    "debug": False,
}

MIN_WIDTH_OVERRIDE = 20
MAX_WIDTH_OVERRIDE = 500
MIN_POLL_INTERVAL_MS = 10

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def get_config_dir() -> Path:
    """Get the consolehelper config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "consolehelper"


def get_config_path() -> Path:
    """Get the path to the main config file."""
    return get_config_dir() / "config.json"


def get_log_path() -> Path:
    """Get the path to the debug log file."""
    return get_config_dir() / "debug.log"


def load_config() -> dict[str, Any]:
    """Load the configuration file and apply environment overrides."""
    config_path = get_config_path()

    try:
        with open(config_path) as f:
            loaded = json.load(f)
        if isinstance(loaded, dict):
            config = _deep_merge(copy.deepcopy(DEFAULT_CONFIG), loaded)
        else:
            config = copy.deepcopy(DEFAULT_CONFIG)
    except FileNotFoundError:
        config = copy.deepcopy(DEFAULT_CONFIG)
    except (json.JSONDecodeError, OSError) as e:
        # Corrupted or unreadable config - use defaults
        logger.debug(f"Ignoring config {config_path}: {e}")
        config = copy.deepcopy(DEFAULT_CONFIG)

    return _apply_env_overrides(config)


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    raw_width = os.environ.get("CONSOLEHELPER_WIDTH", "").strip()
    if raw_width:
        try:
            width = int(raw_width)
        except ValueError:
            logger.debug(f"Ignoring non-numeric CONSOLEHELPER_WIDTH={raw_width!r}")
        else:
            config["fallback_width"] = max(MIN_WIDTH_OVERRIDE, min(MAX_WIDTH_OVERRIDE, width))

    raw_poll = os.environ.get("CONSOLEHELPER_POLL_MS", "").strip()
    if raw_poll:
        try:
            config["poll_interval_ms"] = max(MIN_POLL_INTERVAL_MS, int(raw_poll))
        except ValueError:
            logger.debug(f"Ignoring non-numeric CONSOLEHELPER_POLL_MS={raw_poll!r}")

    raw_interactive = os.environ.get("CONSOLEHELPER_INTERACTIVE", "").strip().lower()
    if raw_interactive in _TRUE_VALUES:
        config["interactive"] = True
    elif raw_interactive in _FALSE_VALUES:
        config["interactive"] = False

    return config


def setup_logging(debug: bool) -> Path | None:
    """Send consolehelper debug records to the debug log file.

    Returns the log path when logging was enabled, otherwise None.
    """
    if not debug:
        return None

    log_path = get_log_path()
    package_logger = logging.getLogger("consolehelper")
    package_logger.setLevel(logging.DEBUG)

    # One handler per log file, however often this is called
    target = os.path.abspath(log_path)
    for existing in package_logger.handlers:
        if isinstance(existing, logging.FileHandler) and existing.baseFilename == target:
            return log_path

    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    package_logger.addHandler(handler)
    return log_path


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result

"""Tests for configuration loading."""

import json
import logging

import pytest

from consolehelper import config


class TestLoadConfig:
    def test_defaults_when_missing(self, isolated_config):
        assert config.load_config() == config.DEFAULT_CONFIG

    def test_file_values_override_defaults(self, isolated_config):
        isolated_config.mkdir()
        (isolated_config / "config.json").write_text(json.dumps({"fallback_width": 100}))

        loaded = config.load_config()
        assert loaded["fallback_width"] == 100
        assert loaded["poll_interval_ms"] == 100

    def test_corrupt_file_gives_defaults(self, isolated_config):
        isolated_config.mkdir()
        (isolated_config / "config.json").write_text("{not json")
        assert config.load_config() == config.DEFAULT_CONFIG

    def test_non_object_file_gives_defaults(self, isolated_config):
        isolated_config.mkdir()
        (isolated_config / "config.json").write_text("[1, 2]")
        assert config.load_config() == config.DEFAULT_CONFIG

    def test_defaults_not_mutated(self, isolated_config, monkeypatch):
        monkeypatch.setenv("CONSOLEHELPER_WIDTH", "120")
        config.load_config()
        assert config.DEFAULT_CONFIG["fallback_width"] == 80


class TestEnvOverrides:
    def test_width_override(self, isolated_config, monkeypatch):
        monkeypatch.setenv("CONSOLEHELPER_WIDTH", "120")
        assert config.load_config()["fallback_width"] == 120

    def test_width_clamped(self, isolated_config, monkeypatch):
        monkeypatch.setenv("CONSOLEHELPER_WIDTH", "5")
        assert config.load_config()["fallback_width"] == 20
        monkeypatch.setenv("CONSOLEHELPER_WIDTH", "9000")
        assert config.load_config()["fallback_width"] == 500

    def test_width_not_a_number_ignored(self, isolated_config, monkeypatch):
        monkeypatch.setenv("CONSOLEHELPER_WIDTH", "wide")
        assert config.load_config()["fallback_width"] == 80

    def test_poll_interval_has_floor(self, isolated_config, monkeypatch):
        monkeypatch.setenv("CONSOLEHELPER_POLL_MS", "1")
        assert config.load_config()["poll_interval_ms"] == 10

    def test_interactive_flag(self, isolated_config, monkeypatch):
        monkeypatch.setenv("CONSOLEHELPER_INTERACTIVE", "0")
        assert config.load_config()["interactive"] is False
        monkeypatch.setenv("CONSOLEHELPER_INTERACTIVE", "TRUE")
        assert config.load_config()["interactive"] is True
        monkeypatch.setenv("CONSOLEHELPER_INTERACTIVE", "maybe")
        assert config.load_config()["interactive"] is None


class TestPaths:
    def test_paths_under_xdg_config_home(self, isolated_config):
        assert config.get_config_dir() == isolated_config
        assert config.get_config_path() == isolated_config / "config.json"
        assert config.get_log_path() == isolated_config / "debug.log"


class TestSetupLogging:
    @pytest.fixture
    def package_logger(self):
        """The consolehelper logger, restored after the test."""
        package_logger = logging.getLogger("consolehelper")
        old_level = package_logger.level
        old_handlers = list(package_logger.handlers)
        yield package_logger
        for handler in list(package_logger.handlers):
            if handler not in old_handlers:
                package_logger.removeHandler(handler)
                handler.close()
        package_logger.setLevel(old_level)

    def test_disabled_returns_none(self, isolated_config):
        assert config.setup_logging(False) is None
        assert not isolated_config.exists()

    def test_enabled_writes_debug_log(self, isolated_config, package_logger):
        log_path = config.setup_logging(True)
        logging.getLogger("consolehelper.probe").debug("probe result")
        for handler in package_logger.handlers:
            handler.flush()
        assert log_path == isolated_config / "debug.log"
        assert "probe result" in log_path.read_text()

    def test_repeated_setup_adds_one_handler(self, isolated_config, package_logger):
        before = len(package_logger.handlers)
        config.setup_logging(True)
        config.setup_logging(True)
        assert len(package_logger.handlers) == before + 1

        logging.getLogger("consolehelper.cli").debug("only once")
        for handler in package_logger.handlers:
            handler.flush()
        assert (isolated_config / "debug.log").read_text().count("only once") == 1

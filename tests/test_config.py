"""Tests for configuration and logging setup"""
import logging
from pathlib import Path

import pytest

from fracture.config import Config
from fracture.logging_config import get_logger, setup_logging


class TestConfig:
    """Test Config validation and environment loading."""

    def test_defaults(self, monkeypatch, temp_dir):
        monkeypatch.setenv("HOME", str(temp_dir))
        config = Config()
        assert config.fracture_home == temp_dir / ".fracture"
        assert config.shell == "/bin/sh"
        assert config.install_deps is True
        assert config.copy_env is True

    def test_relative_home_rejected(self):
        with pytest.raises(ValueError, match="absolute"):
            Config(fracture_home=Path("relative/dir"))

    def test_blank_shell_falls_back(self, temp_dir):
        assert Config(fracture_home=temp_dir, shell="  ").shell == "/bin/sh"

    def test_from_env(self, monkeypatch, temp_dir):
        monkeypatch.setenv("FRACTURE_HOME", str(temp_dir / "fr"))
        monkeypatch.setenv("SHELL", "/bin/zsh")

        config = Config.from_env(install_deps=False, verbose=None)

        assert config.fracture_home == temp_dir / "fr"
        assert config.shell == "/bin/zsh"
        assert config.install_deps is False
        assert config.verbose is False

    def test_from_env_without_shell(self, monkeypatch, temp_dir):
        monkeypatch.setenv("FRACTURE_HOME", str(temp_dir))
        monkeypatch.delenv("SHELL", raising=False)
        assert Config.from_env().shell == "/bin/sh"

    def test_to_dict(self, temp_dir):
        data = Config(fracture_home=temp_dir).to_dict()
        assert data["fracture_home"] == str(temp_dir)
        assert set(data) == {"fracture_home", "shell", "install_deps", "copy_env", "verbose", "debug"}


class TestLogging:
    """Test logging setup."""

    def test_levels(self, temp_dir):
        setup_logging()
        assert logging.getLogger().level == logging.WARNING
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.INFO

    def test_debug_writes_log_file(self, temp_dir):
        setup_logging(debug=True, log_dir=temp_dir)
        get_logger("fracture.services.registry").debug("hello from test")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello from test" in (temp_dir / "fracture.log").read_text()
        setup_logging()

    def test_logger_names_are_shortened(self):
        assert get_logger("fracture.services.registry").name == "registry"
        assert get_logger("fracture.core").name == "core"

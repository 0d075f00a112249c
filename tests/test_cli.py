"""Tests for CLI and configuration."""

import logging
from unittest.mock import patch

import pytest

from issuetracker.cli import build_parser, load_config, main
from issuetracker.config import ServerConfig, configure_logging


class TestServerConfig:
    """Test ServerConfig loading."""

    def test_defaults(self):
        """Test defaults when the environment is empty."""
        config = ServerConfig.from_env({})
        assert config == ServerConfig()
        assert config.host == "0.0.0.0"
        assert config.port == 7760
        assert config.debug is False
        assert config.threads == 4
        assert config.log_level == "INFO"

    def test_from_env(self):
        """Test reading every setting from the environment."""
        config = ServerConfig.from_env(
            {
                "ISSUETRACKER_HOST": "127.0.0.1",
                "ISSUETRACKER_PORT": "8080",
                "ISSUETRACKER_DEBUG": "yes",
                "ISSUETRACKER_THREADS": "8",
                "ISSUETRACKER_LOG_LEVEL": "debug",
            }
        )
        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.debug is True
        assert config.threads == 8
        assert config.log_level == "DEBUG"

    def test_invalid_port(self):
        """Test that a non-numeric port is reported."""
        with pytest.raises(ValueError, match="ISSUETRACKER_PORT"):
            ServerConfig.from_env({"ISSUETRACKER_PORT": "eighty"})

    def test_override_skips_none(self):
        """Test that None values keep the current setting."""
        config = ServerConfig().override(port=9000, host=None, log_level="warning")
        assert config.port == 9000
        assert config.host == "0.0.0.0"
        assert config.log_level == "WARNING"


class TestCLI:
    """Test the command-line entry point."""

    def test_web_arguments(self, monkeypatch):
        """Test that web flags override environment settings."""
        monkeypatch.setenv("ISSUETRACKER_PORT", "8000")
        monkeypatch.setenv("ISSUETRACKER_HOST", "10.0.0.1")
        args = build_parser().parse_args(["--log-level", "debug", "web", "-p", "9001", "--threads", "2"])

        config = load_config(args)
        assert config.port == 9001
        assert config.host == "10.0.0.1"
        assert config.threads == 2
        assert config.debug is False
        assert config.log_level == "DEBUG"

    def test_web_runs_server(self, monkeypatch):
        """Test that the web command starts the server with the merged config."""
        monkeypatch.delenv("ISSUETRACKER_PORT", raising=False)
        with patch("issuetracker.web.run_server") as run_server:
            main(["web", "--host", "127.0.0.1", "--debug"])

        config = run_server.call_args.args[0]
        assert config.host == "127.0.0.1"
        assert config.port == 7760
        assert config.debug is True

    def test_no_command(self, capsys):
        """Test that running without a command prints help and exits."""
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 1
        assert "usage" in capsys.readouterr().out

    def test_error_exits(self, monkeypatch, capsys):
        """Test that configuration errors are reported on stderr."""
        monkeypatch.setenv("ISSUETRACKER_THREADS", "many")
        with pytest.raises(SystemExit) as exc:
            main(["web"])
        assert exc.value.code == 1
        assert "Error: Invalid ISSUETRACKER_THREADS" in capsys.readouterr().err


def test_configure_logging():
    """Test that logging configuration sets the level when unconfigured."""
    with patch("logging.basicConfig") as basic_config:
        configure_logging("warning")
    assert basic_config.call_args.kwargs["level"] == logging.WARNING

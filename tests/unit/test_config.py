"""Unit tests for configuration settings."""

import json
import os
from unittest.mock import patch

from loadcli.shared.config import Config


class TestSettings:
    """Test Settings configuration class."""

    def test_default_settings(self):
        """Test default configuration values."""
        settings = Config()
        assert settings.connections == 512
        assert settings.requests == 100_000
        assert settings.target_uri == "http://localhost:8080/person"
        assert settings.remainder_policy == "drop"
        assert settings.progress_batch_size == 100

    @patch.dict(os.environ, {"LOADCLI_TARGET_URI": "http://192.168.1.100:8080/"})
    def test_env_override_target(self):
        """Test overriding target_uri via environment variable."""
        settings = Config()
        assert settings.target_uri == "http://192.168.1.100:8080/"

    @patch.dict(os.environ, {"LOADCLI_CONNECTIONS": "64"})
    def test_env_override_connections(self):
        """Test overriding connections via environment variable."""
        settings = Config()
        assert settings.connections == 64

    @patch.dict(os.environ, {"LOADCLI_REMAINDER_POLICY": "distribute"})
    def test_env_override_remainder_policy(self):
        """Test overriding the remainder policy via environment variable."""
        settings = Config()
        assert settings.remainder_policy == "distribute"

    @patch.dict(os.environ, {
        "LOADCLI_CONNECTIONS": "16",
        "LOADCLI_REQUESTS": "1600",
        "LOADCLI_REQUEST_TIMEOUT": "2.5"
    })
    def test_multiple_env_overrides(self):
        """Test multiple environment variable overrides."""
        settings = Config()
        assert settings.connections == 16
        assert settings.requests == 1600
        assert settings.request_timeout == 2.5

    @patch.dict(os.environ, {"LOADCLI_CONNECTIONS": "16"})
    def test_env_takes_precedence_over_init(self):
        """Test environment variables win over constructor arguments."""
        settings = Config(connections=4)
        assert settings.connections == 16

    def test_json_config_file(self, tmp_path, monkeypatch):
        """Test values are read from config.json in the working directory."""
        (tmp_path / "config.json").write_text(json.dumps({"connections": 32, "log_level": "DEBUG"}))
        monkeypatch.chdir(tmp_path)

        settings = Config()

        assert settings.connections == 32
        assert settings.log_level == "DEBUG"

    def test_init_takes_precedence_over_json(self, tmp_path, monkeypatch):
        """Test constructor arguments win over config.json."""
        (tmp_path / "config.json").write_text(json.dumps({"connections": 32}))
        monkeypatch.chdir(tmp_path)

        settings = Config(connections=8)

        assert settings.connections == 8

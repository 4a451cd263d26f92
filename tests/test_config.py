"""Tests for configuration loading."""

import pytest

from roomcast.config import RoomcastConfig
from roomcast.exceptions import ConfigError


class TestConfig:
    def test_defaults(self):
        cfg = RoomcastConfig.from_env({})
        assert cfg.host == "0.0.0.0"
        assert cfg.port == 3000
        assert cfg.chat_path == "/chat"
        assert cfg.default_username == "Anonymous"
        assert cfg.log_level == "INFO"

    def test_reads_prefixed_env(self):
        cfg = RoomcastConfig.from_env(
            {
                "ROOMCAST_PORT": "8100",
                "ROOMCAST_CHAT_PATH": "/ws",
                "ROOMCAST_SEND_TIMEOUT": "1.5",
                "ROOMCAST_LOG_LEVEL": "debug",
                "ROOMCAST_HOST": "",
            }
        )
        assert cfg.port == 8100
        assert cfg.chat_path == "/ws"
        assert cfg.send_timeout == 1.5
        assert cfg.log_level == "DEBUG"
        assert cfg.host == "0.0.0.0"

    @pytest.mark.parametrize(
        "env",
        [
            {"ROOMCAST_PORT": "not-a-port"},
            {"ROOMCAST_PORT": "70000"},
            {"ROOMCAST_SEND_TIMEOUT": "0"},
            {"ROOMCAST_CHAT_PATH": "chat"},
        ],
    )
    def test_invalid_values_raise_config_error(self, env):
        with pytest.raises(ConfigError):
            RoomcastConfig.from_env(env)

    def test_unknown_log_level_raises_config_error(self):
        with pytest.raises(ConfigError):
            RoomcastConfig.from_env({"ROOMCAST_LOG_LEVEL": "verbose"})

from __future__ import annotations

import logging

import pytest

from safari_mcp.config import ConfigError, ServerConfig, load_settings, resolve_log_level


def test_load_settings_defaults() -> None:
    settings = load_settings({})

    assert settings.osascript_command == "/usr/bin/osascript"
    assert settings.application == "Safari"
    assert settings.timeout_seconds == 15
    assert settings.private_window_timeout_seconds == 5.0
    assert settings.activation_timeout_seconds == 2.0
    assert settings.poll_interval_seconds == 0.1


def test_load_settings_reads_overrides() -> None:
    settings = load_settings(
        {
            "SAFARI_MCP_APPLICATION": "Safari Technology Preview",
            "SAFARI_MCP_TIMEOUT_SECONDS": "30",
            "SAFARI_MCP_PRIVATE_WINDOW_TIMEOUT_SECONDS": "2.5",
            "SAFARI_MCP_POLL_INTERVAL_SECONDS": "0.25",
        }
    )

    assert settings.application == "Safari Technology Preview"
    assert settings.timeout_seconds == 30
    assert settings.private_window_timeout_seconds == 2.5
    assert settings.poll_interval_seconds == 0.25


@pytest.mark.parametrize(
    "key, value",
    [
        ("SAFARI_MCP_TIMEOUT_SECONDS", "soon"),
        ("SAFARI_MCP_TIMEOUT_SECONDS", "0"),
        ("SAFARI_MCP_PRIVATE_WINDOW_TIMEOUT_SECONDS", "-1"),
        ("SAFARI_MCP_POLL_INTERVAL_SECONDS", "fast"),
        ("SAFARI_MCP_POLL_INTERVAL_SECONDS", "10"),
    ],
)
def test_load_settings_rejects_invalid_values(key: str, value: str) -> None:
    with pytest.raises(ConfigError):
        load_settings({key: value})


def test_server_config_from_env() -> None:
    config = ServerConfig.from_env({"SAFARI_MCP_NAME": "safari-test"})

    assert config.name == "safari-test"
    assert "1-based" in config.instructions


def test_resolve_log_level() -> None:
    assert resolve_log_level({}, default="WARNING") == logging.WARNING
    assert resolve_log_level({"SAFARI_MCP_LOG_LEVEL": "debug"}) == logging.DEBUG
    with pytest.raises(ConfigError):
        resolve_log_level({"SAFARI_MCP_LOG_LEVEL": "chatty"})

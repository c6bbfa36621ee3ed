from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import Mapping

DEFAULT_SERVER_NAME = "safari-mcp"
DEFAULT_INSTRUCTIONS = (
    "Expose Safari window and tab control tools addressed by 1-based window and tab indices. "
    "Indices are resolved against the live browser on every call; list windows again after mutating."
)
DEFAULT_OSASCRIPT = "/usr/bin/osascript"
DEFAULT_APPLICATION = "Safari"


class ConfigError(ValueError):
    """Raised when Safari MCP configuration is invalid."""


@dataclass(frozen=True, slots=True)
class SafariSettings:
    osascript_command: str = DEFAULT_OSASCRIPT
    application: str = DEFAULT_APPLICATION
    timeout_seconds: int = 15
    private_window_timeout_seconds: float = 5.0
    activation_timeout_seconds: float = 2.0
    poll_interval_seconds: float = 0.1


@dataclass(frozen=True, slots=True)
class ServerConfig:
    name: str = DEFAULT_SERVER_NAME
    instructions: str = DEFAULT_INSTRUCTIONS

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ServerConfig":
        actual_env = env if env is not None else os.environ
        return cls(
            name=actual_env.get("SAFARI_MCP_NAME", DEFAULT_SERVER_NAME),
            instructions=actual_env.get("SAFARI_MCP_INSTRUCTIONS", DEFAULT_INSTRUCTIONS),
        )


def load_settings(env: Mapping[str, str] | None = None) -> SafariSettings:
    actual_env = env if env is not None else os.environ

    osascript_command = actual_env.get("SAFARI_MCP_OSASCRIPT", DEFAULT_OSASCRIPT).strip() or DEFAULT_OSASCRIPT
    application = actual_env.get("SAFARI_MCP_APPLICATION", DEFAULT_APPLICATION).strip() or DEFAULT_APPLICATION
    timeout_seconds = _parse_positive_int(
        actual_env.get("SAFARI_MCP_TIMEOUT_SECONDS", "15"), "SAFARI_MCP_TIMEOUT_SECONDS"
    )
    private_window_timeout_seconds = _parse_positive_float(
        actual_env.get("SAFARI_MCP_PRIVATE_WINDOW_TIMEOUT_SECONDS", "5"),
        "SAFARI_MCP_PRIVATE_WINDOW_TIMEOUT_SECONDS",
    )
    activation_timeout_seconds = _parse_positive_float(
        actual_env.get("SAFARI_MCP_ACTIVATION_TIMEOUT_SECONDS", "2"),
        "SAFARI_MCP_ACTIVATION_TIMEOUT_SECONDS",
    )
    poll_interval_seconds = _parse_positive_float(
        actual_env.get("SAFARI_MCP_POLL_INTERVAL_SECONDS", "0.1"),
        "SAFARI_MCP_POLL_INTERVAL_SECONDS",
    )
    if poll_interval_seconds > private_window_timeout_seconds:
        raise ConfigError(
            "SAFARI_MCP_POLL_INTERVAL_SECONDS cannot exceed SAFARI_MCP_PRIVATE_WINDOW_TIMEOUT_SECONDS."
        )

    return SafariSettings(
        osascript_command=osascript_command,
        application=application,
        timeout_seconds=timeout_seconds,
        private_window_timeout_seconds=private_window_timeout_seconds,
        activation_timeout_seconds=activation_timeout_seconds,
        poll_interval_seconds=poll_interval_seconds,
    )


def resolve_log_level(env: Mapping[str, str] | None = None, default: str = "INFO") -> int:
    actual_env = env if env is not None else os.environ
    raw = actual_env.get("SAFARI_MCP_LOG_LEVEL", default).strip().upper() or default
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ConfigError(f"SAFARI_MCP_LOG_LEVEL '{raw}' is not a valid logging level.")
    return level


def _parse_positive_int(raw: str, field_name: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{field_name} must be an integer.") from exc
    if value <= 0:
        raise ConfigError(f"{field_name} must be greater than zero.")
    return value


def _parse_positive_float(raw: str, field_name: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{field_name} must be a number.") from exc
    if value <= 0:
        raise ConfigError(f"{field_name} must be greater than zero.")
    return value

from __future__ import annotations

import json
import logging
import subprocess

from .config import SafariSettings
from .errors import HostError

logger = logging.getLogger(__name__)


def build_command(settings: SafariSettings, script: str, argv: list[str]) -> list[str]:
    return [settings.osascript_command, "-l", "JavaScript", "-e", script, *argv]


def run_jxa(settings: SafariSettings, script: str, *argv: str) -> object | None:
    """Run a JXA program and decode its JSON output.

    Returns ``None`` when the program prints nothing.
    """
    command = build_command(settings, script, list(argv))
    try:
        completed = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=settings.timeout_seconds,
            check=False,
        )
    except FileNotFoundError as exc:
        raise HostError("config", f"Command '{command[0]}' was not found.") from exc
    except subprocess.TimeoutExpired as exc:
        stderr = exc.stderr if isinstance(exc.stderr, str) else None
        raise HostError(
            "timeout",
            f"Command timed out after {settings.timeout_seconds} seconds.",
            stderr=stderr,
        ) from exc
    except OSError as exc:
        raise HostError("execution", f"Failed to execute command: {exc}") from exc

    stderr = _normalize_output(completed.stderr)
    if stderr:
        for line in stderr.splitlines():
            logger.debug("osascript: %s", line)

    if completed.returncode != 0:
        raise HostError(
            "execution",
            f"Command exited with status {completed.returncode}.",
            stderr=stderr,
        )

    stdout = _normalize_output(completed.stdout)
    if stdout is None:
        return None
    try:
        return json.loads(stdout)
    except json.JSONDecodeError as exc:
        raise HostError("execution", f"Could not decode script output: {stdout!r}") from exc


def _normalize_output(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None

from __future__ import annotations

import logging
import time
from typing import Callable

from .addressing import parse_index, resolve_tab, resolve_window
from .config import SafariSettings
from .errors import HostError, PrivateWindowTimeout, TabNotFound, UsageError
from .host import BrowserHost
from .types import CloseResult, CloseTarget

logger = logging.getLogger(__name__)

CLOSE_TARGETS: tuple[CloseTarget, ...] = ("window", "tab", "tabs-other", "tabs-left", "tabs-right")
_TARGET_ALIASES = {"win": "window"}

_VICTIM_PREDICATES: dict[str, Callable[[int, int], bool]] = {
    "tab": lambda position, target: position == target,
    "tabs-other": lambda position, target: position != target,
    "tabs-left": lambda position, target: position < target,
    "tabs-right": lambda position, target: position > target,
}


def normalize_close_target(raw_target: str) -> CloseTarget:
    target = raw_target.strip().lower()
    target = _TARGET_ALIASES.get(target, target)
    if target not in CLOSE_TARGETS:
        allowed = ", ".join(CLOSE_TARGETS)
        raise UsageError(f"Invalid target: {raw_target!r}. Allowed targets: {allowed}.")
    return target  # type: ignore[return-value]


def activate(host: BrowserHost, window_index: object, tab_index: object = 0) -> None:
    """Bring a window to the front and optionally select one of its tabs.

    A tab index of 0 activates the window without touching tab selection.
    Both indices are resolved before anything changes.
    """
    window = resolve_window(host, window_index)
    requested_tab = parse_index(tab_index, "tab")
    tab = resolve_tab(host, requested_tab, window) if requested_tab != 0 else None

    # Select the tab first: bringing the window forward renumbers it to 1.
    if tab is not None and not tab.active:
        logger.info("Selecting tab %d in window %d", tab.index, window.index)
        host.set_current_tab(window.index, tab.index)

    if window.index != 1:
        logger.info("Bringing window %d to front", window.index)
        host.toggle_visibility(window.index)
    host.activate_app()


def close(
    host: BrowserHost,
    target: str,
    window_index: object = 1,
    tab_index: object | None = None,
) -> CloseResult:
    """Close a window, a tab, or the tabs selected relative to a tab.

    Tab victims are collected from the live tab count up front and closed from
    the highest position down, so positions not yet visited stay valid.
    """
    normalized = normalize_close_target(target)
    window = resolve_window(host, window_index)

    if normalized == "window":
        logger.info("Closing window %d ...", window.index)
        host.close_window(window.index)
        return CloseResult(
            target=normalized,
            window_index=window.index,
            tab_index=None,
            closed=[],
            failed=[],
        )

    if tab_index is None:
        try:
            reference = host.current_tab_index(window.index)
        except HostError as exc:
            if exc.error_type != "execution":
                raise
            raise TabNotFound(window.index, 0) from exc
    else:
        reference = parse_index(tab_index, "tab")

    tab_count = host.tab_count(window.index)
    lowest = 1 if normalized in ("tab", "tabs-other") else 0
    if not lowest <= reference <= tab_count:
        raise TabNotFound(window.index, reference)

    logger.info("winIdx=%d, tabIdx=%d", window.index, reference)
    predicate = _VICTIM_PREDICATES[normalized]
    victims = [position for position in range(tab_count, 0, -1) if predicate(position, reference)]

    closed: list[int] = []
    failed: list[int] = []
    for position in victims:
        logger.info("Closing tab %d ...", position)
        try:
            host.close_tab(window.index, position)
        except HostError as exc:
            logger.warning("Could not close tab %d of window %d: %s", position, window.index, exc)
            failed.append(position)
            continue
        closed.append(position)

    return CloseResult(
        target=normalized,
        window_index=window.index,
        tab_index=reference,
        closed=closed,
        failed=failed,
    )


def open_in_current_tab(host: BrowserHost, url: str) -> None:
    logger.info("Opening %s in current tab", url)
    host.set_window_url(1, url)


def open_in_new_window(host: BrowserHost, url: str) -> None:
    logger.info("Opening %s in new window", url)
    host.create_window(url)


def open_in_private_window(host: BrowserHost, settings: SafariSettings, url: str) -> None:
    """Open ``url`` in a new private window.

    The scripting dictionary has no verb for private windows, so the menu
    shortcut is sent and the window count is polled until the window exists.
    """
    logger.info("url=%s", url)
    if not host.is_frontmost():
        host.activate_app()
        if not _wait_until(
            host.is_frontmost,
            settings.activation_timeout_seconds,
            settings.poll_interval_seconds,
        ):
            logger.warning(
                "%s is not frontmost after %gs; sending shortcut anyway",
                settings.application,
                settings.activation_timeout_seconds,
            )

    baseline = host.window_count()
    host.new_private_window()
    if not _wait_until(
        lambda: host.window_count() > baseline,
        settings.private_window_timeout_seconds,
        settings.poll_interval_seconds,
    ):
        raise PrivateWindowTimeout(settings.private_window_timeout_seconds)
    host.set_window_url(1, url)


def run_script(host: BrowserHost, window_index: object, tab_index: object, script: str) -> object | None:
    window = resolve_window(host, window_index)
    tab = resolve_tab(host, tab_index, window)
    logger.info("Running JS in tab %dx%d ...", window.index, tab.index)
    return host.evaluate_script(window.index, tab.index, script)


def reopen_in_new_window(host: BrowserHost, window_index: object, tab_index: object) -> str:
    """Move a tab into a window of its own and return its URL."""
    window = resolve_window(host, window_index)
    tab = resolve_tab(host, tab_index, window)
    host.create_window(tab.url)
    # The new window takes index 1 and shifts the source window down by one.
    host.close_tab(window.index + 1, tab.index)
    logger.info("Reopened %s in new window", tab.url)
    return tab.url


def _wait_until(condition: Callable[[], bool], timeout_seconds: float, interval_seconds: float) -> bool:
    deadline = time.monotonic() + timeout_seconds
    while True:
        if condition():
            return True
        if time.monotonic() >= deadline:
            return False
        time.sleep(interval_seconds)

from __future__ import annotations

import logging

from .errors import HostError, WindowNotFound
from .host import BrowserHost
from .types import CurrentTab, TabRecord, WindowSnapshot

logger = logging.getLogger(__name__)


def list_all(host: BrowserHost) -> list[WindowSnapshot]:
    """Snapshot every browser window in native order.

    Windows without a readable current tab (preferences, downloads and other
    non-browser windows) are skipped.
    """
    results: list[WindowSnapshot] = []
    for window in host.snapshot():
        if window.active_tab is None:
            logger.info("Ignoring window %d: no current tab", window.index)
            continue

        tabs = [
            TabRecord(
                title=info.title,
                url=info.url,
                index=tab_index,
                windowIndex=window.index,
                active=tab_index == window.active_tab,
            )
            for tab_index, info in enumerate(window.tabs, start=1)
        ]
        results.append(WindowSnapshot(index=window.index, tabs=tabs, activeTab=window.active_tab))
    return results


def current_tab(host: BrowserHost) -> CurrentTab:
    """Return the current tab of the frontmost window."""
    try:
        tab_index = host.current_tab_index(1)
        info = host.tab(1, tab_index)
    except HostError as exc:
        if exc.error_type != "execution":
            raise
        raise WindowNotFound(1) from exc
    logger.info('win=1, tab=%d, title="%s", url=%s', tab_index, info.title, info.url)
    return CurrentTab(title=info.title, url=info.url, index=tab_index, windowIndex=1)

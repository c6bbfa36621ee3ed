from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Mapping, Protocol

from . import scripts
from .config import SafariSettings
from .errors import HostError
from .runner import run_jxa


@dataclass(frozen=True, slots=True)
class TabInfo:
    title: str
    url: str
    active: bool


@dataclass(frozen=True, slots=True)
class WindowState:
    """One window as read in a snapshot; ``active_tab`` is None when unreadable."""

    index: int
    active_tab: int | None
    tabs: tuple[TabInfo, ...]


class BrowserHost(Protocol):
    """Live window/tab collection of the browser.

    All indices are 1-based positions at the time of the call. Any method
    raises ``HostError`` when the host rejects the lookup or the action.
    """

    def window_count(self) -> int: ...

    def snapshot(self) -> list[WindowState]: ...

    def probe_window(self, window_index: int) -> None: ...

    def tab_count(self, window_index: int) -> int: ...

    def current_tab_index(self, window_index: int) -> int: ...

    def tab(self, window_index: int, tab_index: int) -> TabInfo: ...

    def close_window(self, window_index: int) -> None: ...

    def close_tab(self, window_index: int, tab_index: int) -> None: ...

    def set_current_tab(self, window_index: int, tab_index: int) -> None: ...

    def create_window(self, url: str) -> None: ...

    def set_window_url(self, window_index: int, url: str) -> None: ...

    def toggle_visibility(self, window_index: int) -> None: ...

    def activate_app(self) -> None: ...

    def is_frontmost(self) -> bool: ...

    def new_private_window(self) -> None: ...

    def evaluate_script(self, window_index: int, tab_index: int, source: str) -> object | None: ...


class Pasteboard(Protocol):
    def write(self, items: Mapping[str, str]) -> None:
        """Clear the general pasteboard, then store each type tag's text."""
        ...


class OsascriptHost:
    """BrowserHost backed by JXA programs run through osascript."""

    def __init__(self, settings: SafariSettings) -> None:
        self._settings = settings

    def _run(self, script: str, *args: object) -> object | None:
        return run_jxa(self._settings, script, self._settings.application, *(str(arg) for arg in args))

    def _run_int(self, script: str, *args: object) -> int:
        value = self._run(script, *args)
        if not isinstance(value, int) or isinstance(value, bool):
            raise HostError("execution", f"Expected an integer from the host, got {value!r}.")
        return value

    def window_count(self) -> int:
        return self._run_int(scripts.WINDOW_COUNT)

    def snapshot(self) -> list[WindowState]:
        data = self._run(scripts.SNAPSHOT)
        if not isinstance(data, list):
            raise HostError("execution", f"Expected a window list from the host, got {data!r}.")
        windows: list[WindowState] = []
        for entry in data:
            active_tab = entry.get("activeTab")
            tabs = tuple(
                TabInfo(
                    title=str(item.get("title") or ""),
                    url=str(item.get("url") or ""),
                    active=position == active_tab,
                )
                for position, item in enumerate(entry.get("tabs") or [], start=1)
            )
            windows.append(WindowState(index=int(entry["index"]), active_tab=active_tab, tabs=tabs))
        return windows

    def probe_window(self, window_index: int) -> None:
        self._run(scripts.PROBE_WINDOW, window_index)

    def tab_count(self, window_index: int) -> int:
        return self._run_int(scripts.TAB_COUNT, window_index)

    def current_tab_index(self, window_index: int) -> int:
        return self._run_int(scripts.CURRENT_TAB_INDEX, window_index)

    def tab(self, window_index: int, tab_index: int) -> TabInfo:
        data = self._run(scripts.TAB_INFO, window_index, tab_index)
        if not isinstance(data, dict):
            raise HostError("execution", f"Expected tab details from the host, got {data!r}.")
        return TabInfo(
            title=str(data.get("title") or ""),
            url=str(data.get("url") or ""),
            active=bool(data.get("active")),
        )

    def close_window(self, window_index: int) -> None:
        self._run(scripts.CLOSE_WINDOW, window_index)

    def close_tab(self, window_index: int, tab_index: int) -> None:
        self._run(scripts.CLOSE_TAB, window_index, tab_index)

    def set_current_tab(self, window_index: int, tab_index: int) -> None:
        self._run(scripts.SET_CURRENT_TAB, window_index, tab_index)

    def create_window(self, url: str) -> None:
        self._run(scripts.CREATE_WINDOW, url)

    def set_window_url(self, window_index: int, url: str) -> None:
        self._run(scripts.SET_WINDOW_URL, window_index, url)

    def toggle_visibility(self, window_index: int) -> None:
        self._run(scripts.TOGGLE_VISIBILITY, window_index)

    def activate_app(self) -> None:
        self._run(scripts.ACTIVATE_APP)

    def is_frontmost(self) -> bool:
        return bool(self._run(scripts.IS_FRONTMOST))

    def new_private_window(self) -> None:
        self._run(scripts.NEW_PRIVATE_WINDOW)

    def evaluate_script(self, window_index: int, tab_index: int, source: str) -> object | None:
        return self._run(scripts.EVALUATE_SCRIPT, window_index, tab_index, source)


class OsascriptPasteboard:
    def __init__(self, settings: SafariSettings) -> None:
        self._settings = settings

    def write(self, items: Mapping[str, str]) -> None:
        run_jxa(self._settings, scripts.PASTEBOARD_WRITE, json.dumps(dict(items)))


def create_host(settings: SafariSettings) -> BrowserHost:
    return OsascriptHost(settings)


def create_pasteboard(settings: SafariSettings) -> Pasteboard:
    return OsascriptPasteboard(settings)

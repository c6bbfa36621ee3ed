from __future__ import annotations

from dataclasses import dataclass
import logging

from .errors import HostError, InvalidIndexFormat, TabNotFound, WindowNotFound
from .host import BrowserHost

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WindowHandle:
    index: int


@dataclass(frozen=True, slots=True)
class TabHandle:
    title: str
    url: str
    index: int
    window_index: int
    active: bool


def parse_index(raw_value: object, field_name: str) -> int:
    """Parse a raw window or tab index.

    Accepts ints and strings of ASCII decimal digits with an optional leading
    minus. ``bool`` is rejected even though it is an ``int`` subclass.
    """
    if isinstance(raw_value, bool) or raw_value is None:
        raise InvalidIndexFormat(field_name, raw_value)
    if isinstance(raw_value, int):
        return raw_value
    if isinstance(raw_value, str):
        text = raw_value.strip()
        digits = text[1:] if text.startswith("-") else text
        # int() alone would also take "1_000", "+1" and non-ASCII digits.
        if not (digits.isascii() and digits.isdigit()):
            raise InvalidIndexFormat(field_name, raw_value)
        return int(text)
    raise InvalidIndexFormat(field_name, raw_value)


def resolve_window(host: BrowserHost, raw_index: object) -> WindowHandle:
    window_index = parse_index(raw_index, "window")
    # Negative indices would select from the end of the native collection.
    if window_index < 1:
        raise WindowNotFound(window_index)
    try:
        host.probe_window(window_index)
    except HostError as exc:
        if exc.error_type != "execution":
            raise
        logger.debug("Window lookup %d failed: %s", window_index, exc.stderr or exc)
        raise WindowNotFound(window_index) from exc
    return WindowHandle(index=window_index)


def resolve_tab(host: BrowserHost, raw_index: object, window: WindowHandle) -> TabHandle:
    tab_index = parse_index(raw_index, "tab")
    if tab_index < 1:
        raise TabNotFound(window.index, tab_index)
    try:
        info = host.tab(window.index, tab_index)
    except HostError as exc:
        if exc.error_type != "execution":
            raise
        logger.debug("Tab lookup %d/%d failed: %s", window.index, tab_index, exc.stderr or exc)
        raise TabNotFound(window.index, tab_index) from exc
    return TabHandle(
        title=info.title,
        url=info.url,
        index=tab_index,
        window_index=window.index,
        active=info.active,
    )

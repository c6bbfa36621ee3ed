from __future__ import annotations

import logging

from .addressing import TabHandle, resolve_tab, resolve_window
from .host import BrowserHost, Pasteboard
from .types import CopyFormat

logger = logging.getLogger(__name__)

PLAIN_TEXT_TYPE = "public.utf8-plain-text"
URL_TYPE = "public.url"
URL_NAME_TYPE = "public.url-name"


def format_markdown_link(title: str, url: str) -> str:
    return f"[{title}]({url})"


def encode_tab(tab: TabHandle, copy_format: CopyFormat) -> dict[str, str]:
    if copy_format == "markdown":
        return {PLAIN_TEXT_TYPE: format_markdown_link(tab.title, tab.url)}
    if copy_format == "url":
        return {URL_TYPE: tab.url, URL_NAME_TYPE: tab.title}
    raise ValueError(f"Unsupported copy format '{copy_format}'.")


def copy_tab(
    host: BrowserHost,
    pasteboard: Pasteboard,
    window_index: object,
    tab_index: object,
    copy_format: CopyFormat,
) -> TabHandle:
    window = resolve_window(host, window_index)
    tab = resolve_tab(host, tab_index, window)
    pasteboard.write(encode_tab(tab, copy_format))
    logger.info("Copied tab %dx%d as %s", tab.window_index, tab.index, copy_format)
    return tab


def copy_markdown_link(
    host: BrowserHost, pasteboard: Pasteboard, window_index: object, tab_index: object
) -> TabHandle:
    return copy_tab(host, pasteboard, window_index, tab_index, "markdown")


def copy_url(host: BrowserHost, pasteboard: Pasteboard, window_index: object, tab_index: object) -> TabHandle:
    return copy_tab(host, pasteboard, window_index, tab_index, "url")

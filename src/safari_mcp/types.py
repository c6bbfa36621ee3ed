from typing import Literal

from typing_extensions import TypedDict

# Wire keys are camelCase to match the JSON consumed by launcher workflows.

CloseTarget = Literal["window", "tab", "tabs-other", "tabs-left", "tabs-right"]
OpenMode = Literal["current", "window", "private"]
CopyFormat = Literal["markdown", "url"]


class TabRecord(TypedDict):
    title: str
    url: str
    index: int
    windowIndex: int
    active: bool


class WindowSnapshot(TypedDict):
    index: int
    tabs: list[TabRecord]
    activeTab: int


class CurrentTab(TypedDict):
    title: str
    url: str
    index: int
    windowIndex: int


class ListWindowsResult(TypedDict):
    windows: list[WindowSnapshot]


class CloseResult(TypedDict):
    target: CloseTarget
    window_index: int
    tab_index: int | None
    closed: list[int]
    failed: list[int]


class ActionResult(TypedDict):
    ok: bool
    action: str
    window_index: int | None
    tab_index: int | None
    url: str | None
    closed: list[int] | None
    failed: list[int] | None
    result: object | None
    error_type: str | None
    error_message: str | None

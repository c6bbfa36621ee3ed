from __future__ import annotations


class BrowserControlError(RuntimeError):
    """Base class for failures that end one browser-control invocation."""

    error_type = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidIndexFormat(BrowserControlError):
    error_type = "invalid_index"

    def __init__(self, field_name: str, raw_value: object):
        super().__init__(f"Invalid {field_name}: {raw_value!r} is not an integer.")
        self.field_name = field_name
        self.raw_value = raw_value


class WindowNotFound(BrowserControlError):
    error_type = "window_not_found"

    def __init__(self, window_index: int):
        super().__init__(f"Invalid window: {window_index}")
        self.window_index = window_index


class TabNotFound(BrowserControlError):
    error_type = "tab_not_found"

    def __init__(self, window_index: int, tab_index: int):
        super().__init__(f"Invalid tab for window {window_index}: {tab_index}")
        self.window_index = window_index
        self.tab_index = tab_index


class UsageError(BrowserControlError):
    error_type = "usage"


class PrivateWindowTimeout(BrowserControlError):
    error_type = "private_window_timeout"

    def __init__(self, timeout_seconds: float):
        super().__init__(f"Private window did not appear within {timeout_seconds:g} seconds.")
        self.timeout_seconds = timeout_seconds


class HostError(BrowserControlError):
    """Raised when the host application cannot be driven.

    ``error_type`` is ``config`` when the scripting command is missing,
    ``timeout`` when it hangs, and ``execution`` when the script itself fails,
    which includes every failed lookup of a window or tab.
    """

    def __init__(self, error_type: str, message: str, stderr: str | None = None):
        super().__init__(message)
        self.error_type = error_type
        self.stderr = stderr

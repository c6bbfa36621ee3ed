from __future__ import annotations

import logging

from mcp.server.fastmcp import Context, FastMCP

from . import clipboard, enumeration, operations
from .config import SafariSettings, ServerConfig, load_settings, resolve_log_level
from .errors import BrowserControlError
from .host import BrowserHost, Pasteboard, create_host, create_pasteboard
from .types import ActionResult, CloseTarget, CopyFormat, CurrentTab, ListWindowsResult, OpenMode

logger = logging.getLogger(__name__)


def create_server(
    settings: SafariSettings | None = None,
    server_config: ServerConfig | None = None,
    host: BrowserHost | None = None,
    pasteboard: Pasteboard | None = None,
) -> FastMCP:
    resolved_settings = settings or load_settings()
    resolved_server_config = server_config or ServerConfig.from_env()
    resolved_host = host or create_host(resolved_settings)
    resolved_pasteboard = pasteboard or create_pasteboard(resolved_settings)

    server = FastMCP(
        name=resolved_server_config.name,
        instructions=resolved_server_config.instructions,
    )

    @server.tool(
        name="safari_list_windows",
        title="List Safari windows and tabs",
        description=(
            "List browser windows in front-to-back order with their tabs. "
            "Window and tab indices are 1-based and only valid until the next mutation."
        ),
        structured_output=True,
    )
    async def safari_list_windows() -> ListWindowsResult:
        return ListWindowsResult(windows=enumeration.list_all(resolved_host))

    @server.tool(
        name="safari_current_tab",
        title="Get current Safari tab",
        description="Return title, URL and index of the frontmost window's current tab.",
        structured_output=True,
    )
    async def safari_current_tab() -> CurrentTab:
        return enumeration.current_tab(resolved_host)

    @server.tool(
        name="safari_activate",
        title="Activate window or tab",
        description="Bring a window to the front and select a tab. tab_index 0 activates the window only.",
        structured_output=True,
    )
    async def safari_activate(
        window_index: int,
        tab_index: int = 0,
        *,
        context: Context | None = None,
    ) -> ActionResult:
        if context is not None:
            await context.report_progress(0, 1, f"Activating window {window_index}")
        try:
            operations.activate(resolved_host, window_index, tab_index)
        except BrowserControlError as exc:
            return _error_result("activate", exc, window_index=window_index, tab_index=tab_index)
        if context is not None:
            await context.report_progress(1, 1, "Activation complete")
        return _success_result("activate", window_index=window_index, tab_index=tab_index)

    @server.tool(
        name="safari_close",
        title="Close window or tabs",
        description=(
            "Close a window, one tab, or the tabs other than / left of / right of a tab. "
            "window_index defaults to the frontmost window and tab_index to its current tab."
        ),
        structured_output=True,
    )
    async def safari_close(
        target: CloseTarget,
        window_index: int = 1,
        tab_index: int | None = None,
        *,
        context: Context | None = None,
    ) -> ActionResult:
        if context is not None:
            await context.report_progress(0, 1, f"Closing {target} in window {window_index}")
        try:
            result = operations.close(resolved_host, target, window_index, tab_index)
        except BrowserControlError as exc:
            return _error_result("close", exc, window_index=window_index, tab_index=tab_index)
        if context is not None:
            await context.report_progress(1, 1, f"Closed {len(result['closed'])} tab(s)")
        return _success_result(
            "close",
            window_index=result["window_index"],
            tab_index=result["tab_index"],
            closed=result["closed"],
            failed=result["failed"],
        )

    @server.tool(
        name="safari_open_url",
        title="Open URL",
        description="Open a URL in the current tab, a new window, or a new private window.",
        structured_output=True,
    )
    async def safari_open_url(
        url: str,
        mode: OpenMode = "current",
        *,
        context: Context | None = None,
    ) -> ActionResult:
        if context is not None:
            await context.report_progress(0, 1, f"Opening URL ({mode})")
        try:
            if mode == "current":
                operations.open_in_current_tab(resolved_host, url)
            elif mode == "window":
                operations.open_in_new_window(resolved_host, url)
            elif mode == "private":
                operations.open_in_private_window(resolved_host, resolved_settings, url)
            else:
                return _validation_error("open_url", f"Unsupported mode '{mode}'.", url=url)
        except BrowserControlError as exc:
            return _error_result("open_url", exc, url=url)
        if context is not None:
            await context.report_progress(1, 1, "URL opened")
        return _success_result("open_url", window_index=1, url=url)

    @server.tool(
        name="safari_run_script",
        title="Run JavaScript in tab",
        description="Evaluate JavaScript in a tab's page and return the value it produces.",
        structured_output=True,
    )
    async def safari_run_script(
        window_index: int,
        tab_index: int,
        script: str,
    ) -> ActionResult:
        try:
            value = operations.run_script(resolved_host, window_index, tab_index, script)
        except BrowserControlError as exc:
            return _error_result("run_script", exc, window_index=window_index, tab_index=tab_index)
        return _success_result("run_script", window_index=window_index, tab_index=tab_index, result=value)

    @server.tool(
        name="safari_copy_tab",
        title="Copy tab to clipboard",
        description=(
            "Copy a tab to the clipboard. format 'markdown' writes [title](url) as plain text; "
            "format 'url' writes the URL and its title as a named URL."
        ),
        structured_output=True,
    )
    async def safari_copy_tab(
        window_index: int,
        tab_index: int,
        format: CopyFormat = "markdown",
    ) -> ActionResult:
        if format not in ("markdown", "url"):
            return _validation_error(
                "copy_tab",
                f"Unsupported format '{format}'.",
                window_index=window_index,
                tab_index=tab_index,
            )
        try:
            tab = clipboard.copy_tab(resolved_host, resolved_pasteboard, window_index, tab_index, format)
        except BrowserControlError as exc:
            return _error_result("copy_tab", exc, window_index=window_index, tab_index=tab_index)
        return _success_result("copy_tab", window_index=window_index, tab_index=tab_index, url=tab.url)

    @server.tool(
        name="safari_reopen_in_new_window",
        title="Reopen tab in new window",
        description="Close a tab and open its URL in a new window.",
        structured_output=True,
    )
    async def safari_reopen_in_new_window(window_index: int, tab_index: int) -> ActionResult:
        try:
            url = operations.reopen_in_new_window(resolved_host, window_index, tab_index)
        except BrowserControlError as exc:
            return _error_result("reopen_in_new_window", exc, window_index=window_index, tab_index=tab_index)
        return _success_result("reopen_in_new_window", window_index=1, url=url)

    return server


def _success_result(
    action: str,
    window_index: int | None = None,
    tab_index: int | None = None,
    url: str | None = None,
    closed: list[int] | None = None,
    failed: list[int] | None = None,
    result: object | None = None,
) -> ActionResult:
    return ActionResult(
        ok=True,
        action=action,
        window_index=window_index,
        tab_index=tab_index,
        url=url,
        closed=closed,
        failed=failed,
        result=result,
        error_type=None,
        error_message=None,
    )


def _error_result(
    action: str,
    exc: BrowserControlError,
    window_index: int | None = None,
    tab_index: int | None = None,
    url: str | None = None,
) -> ActionResult:
    logger.warning("%s failed: %s", action, exc)
    return ActionResult(
        ok=False,
        action=action,
        window_index=window_index,
        tab_index=tab_index,
        url=url,
        closed=None,
        failed=None,
        result=None,
        error_type=exc.error_type,
        error_message=str(exc),
    )


def _validation_error(
    action: str,
    message: str,
    window_index: int | None = None,
    tab_index: int | None = None,
    url: str | None = None,
) -> ActionResult:
    return ActionResult(
        ok=False,
        action=action,
        window_index=window_index,
        tab_index=tab_index,
        url=url,
        closed=None,
        failed=None,
        result=None,
        error_type="validation",
        error_message=message,
    )


def main() -> None:
    logging.basicConfig(
        level=resolve_log_level(default="INFO"),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    server = create_server()
    server.run()


if __name__ == "__main__":
    main()

"""Command-line entry point used by launcher workflows.

Each invocation resolves indices against the live browser, performs one
operation and exits. Read commands print one JSON value on stdout; failures
print one diagnostic line on stdout and exit with status 1. Logs go to stderr.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence

from . import clipboard, enumeration, operations
from .config import ConfigError, SafariSettings, load_settings, resolve_log_level
from .errors import BrowserControlError, HostError, UsageError
from .host import BrowserHost, Pasteboard, create_host, create_pasteboard

logger = logging.getLogger(__name__)

CLOSE_USAGE = (
    "Close specified window and/or tab(s). If not specified, <win> and <tab> "
    "default to the frontmost window and its current tab respectively."
)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(f"{self.prog}: {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="safari-tabs", description="Control Safari windows and tabs by index.")
    commands = parser.add_subparsers(dest="command", metavar="<command>")
    commands.required = True

    commands.add_parser("tabs", help="List windows and their tabs as JSON.")
    commands.add_parser("current-tab", help="Print the frontmost window's current tab as JSON.")

    activate = commands.add_parser("activate", help="Bring a window (and tab) to the front.")
    activate.add_argument("window")
    activate.add_argument("tab", nargs="?", default="0", help="0 activates the window only.")

    close = commands.add_parser(
        "close",
        help="Close a window or tabs.",
        description=CLOSE_USAGE,
        usage="%(prog)s (win|tab|tabs-other|tabs-left|tabs-right) [<win>] [<tab>]",
    )
    close.add_argument("target")
    close.add_argument("window", nargs="?", default="1")
    close.add_argument("tab", nargs="?", default=None)

    for name, help_text in (
        ("open-current", "Open URL in the current tab."),
        ("open-window", "Open URL in a new window."),
        ("open-private", "Open URL in a new private window."),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("url")

    run_js = commands.add_parser("run-js", help="Run JavaScript in a tab.", usage="%(prog)s <win> <tab> <script>")
    run_js.add_argument("args", nargs="*")

    for name, help_text in (
        ("copy-markdown", "Copy a tab as a Markdown link."),
        ("copy-url", "Copy a tab's URL and title."),
        ("reopen-window", "Move a tab into a new window."),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("window")
        command.add_argument("tab")

    return parser


def execute(
    args: argparse.Namespace,
    settings: SafariSettings,
    host: BrowserHost,
    pasteboard: Pasteboard,
) -> object | None:
    """Run one parsed command and return the value to print, if any."""
    command = args.command
    if command == "tabs":
        return enumeration.list_all(host)
    if command == "current-tab":
        return enumeration.current_tab(host)
    if command == "activate":
        operations.activate(host, args.window, args.tab)
        return None
    if command == "close":
        result = operations.close(host, args.target, args.window, args.tab)
        if result["failed"]:
            logger.warning("Failed to close tabs %s", result["failed"])
        return None
    if command == "open-current":
        operations.open_in_current_tab(host, args.url)
        return None
    if command == "open-window":
        operations.open_in_new_window(host, args.url)
        return None
    if command == "open-private":
        operations.open_in_private_window(host, settings, args.url)
        return None
    if command == "run-js":
        if len(args.args) != 3:
            raise UsageError("Usage: safari-tabs run-js <win> <tab> <script>")
        window_index, tab_index, script = args.args
        return operations.run_script(host, window_index, tab_index, script)
    if command == "copy-markdown":
        clipboard.copy_markdown_link(host, pasteboard, args.window, args.tab)
        return None
    if command == "copy-url":
        clipboard.copy_url(host, pasteboard, args.window, args.tab)
        return None
    if command == "reopen-window":
        operations.reopen_in_new_window(host, args.window, args.tab)
        return None
    raise UsageError(f"Unknown command: {command}")


def main(
    argv: Sequence[str] | None = None,
    *,
    settings: SafariSettings | None = None,
    host: BrowserHost | None = None,
    pasteboard: Pasteboard | None = None,
) -> int:
    try:
        logging.basicConfig(
            stream=sys.stderr,
            level=resolve_log_level(default="INFO"),
            format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        )
        resolved_settings = settings or load_settings()
        args = build_parser().parse_args(argv)
        output = execute(
            args,
            resolved_settings,
            host or create_host(resolved_settings),
            pasteboard or create_pasteboard(resolved_settings),
        )
    except HostError as exc:
        # Keep the host's own reason on the single diagnostic line.
        print(f"{exc}: {' '.join(exc.stderr.split())}" if exc.stderr else str(exc))
        return 1
    except (BrowserControlError, ConfigError) as exc:
        print(str(exc))
        return 1

    if output is not None:
        print(json.dumps(output))
    return 0


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import json

import pytest

from safari_mcp import cli
from safari_mcp.config import SafariSettings
from safari_mcp.errors import HostError

from fakes import FakePasteboard, FakeSafari, make_window


def _run(
    argv: list[str],
    safari: FakeSafari,
    settings: SafariSettings,
    pasteboard: FakePasteboard | None = None,
) -> int:
    return cli.main(argv, settings=settings, host=safari, pasteboard=pasteboard or FakePasteboard())


def test_tabs_prints_json(capsys: pytest.CaptureFixture[str], settings: SafariSettings) -> None:
    safari = FakeSafari(windows=[make_window("A", "B", current=2), make_window("Prefs", current=None)])

    assert _run(["tabs"], safari, settings) == 0

    output = json.loads(capsys.readouterr().out)
    assert output == [
        {
            "index": 1,
            "tabs": [
                {"title": "A", "url": "https://a.example.com/", "index": 1, "windowIndex": 1, "active": False},
                {"title": "B", "url": "https://b.example.com/", "index": 2, "windowIndex": 1, "active": True},
            ],
            "activeTab": 2,
        }
    ]


def test_current_tab_prints_flat_json(capsys: pytest.CaptureFixture[str], settings: SafariSettings) -> None:
    safari = FakeSafari(windows=[make_window("A")])

    assert _run(["current-tab"], safari, settings) == 0

    assert json.loads(capsys.readouterr().out) == {
        "title": "A",
        "url": "https://a.example.com/",
        "index": 1,
        "windowIndex": 1,
    }


def test_invalid_window_prints_diagnostic_and_fails(
    capsys: pytest.CaptureFixture[str], settings: SafariSettings
) -> None:
    safari = FakeSafari(windows=[make_window("A")])

    assert _run(["activate", "3"], safari, settings) == 1

    assert capsys.readouterr().out.strip() == "Invalid window: 3"


def test_non_numeric_tab_fails(capsys: pytest.CaptureFixture[str], settings: SafariSettings) -> None:
    safari = FakeSafari(windows=[make_window("A")])

    assert _run(["copy-url", "1", "first"], safari, settings) == 1

    assert "Invalid tab" in capsys.readouterr().out


def test_close_with_defaults(settings: SafariSettings) -> None:
    safari = FakeSafari(windows=[make_window("A", "B", "C", "D", current=2)])

    assert _run(["close", "tabs-other"], safari, settings) == 0

    assert safari.titles() == ["B"]


def test_close_unknown_target_is_usage_error(capsys: pytest.CaptureFixture[str], settings: SafariSettings) -> None:
    safari = FakeSafari(windows=[make_window("A")])

    assert _run(["close", "all"], safari, settings) == 1

    assert "Invalid target" in capsys.readouterr().out
    assert safari.calls == []


@pytest.mark.parametrize("args", [["1", "1"], ["1", "1", "x", "extra"], []])
def test_run_js_requires_three_arguments(
    args: list[str], capsys: pytest.CaptureFixture[str], settings: SafariSettings
) -> None:
    safari = FakeSafari(windows=[make_window("A")])

    assert _run(["run-js", *args], safari, settings) == 1

    assert capsys.readouterr().out.strip() == "Usage: safari-tabs run-js <win> <tab> <script>"


def test_run_js_prints_result(capsys: pytest.CaptureFixture[str], settings: SafariSettings) -> None:
    safari = FakeSafari(windows=[make_window("A")], script_result="hello")

    assert _run(["run-js", "1", "1", "document.title"], safari, settings) == 0

    assert json.loads(capsys.readouterr().out) == "hello"


def test_unknown_command_is_usage_error(capsys: pytest.CaptureFixture[str], settings: SafariSettings) -> None:
    assert _run(["explode"], FakeSafari(), settings) == 1

    assert capsys.readouterr().out.startswith("safari-tabs:")


def test_copy_markdown(settings: SafariSettings) -> None:
    safari = FakeSafari(windows=[make_window("Example")])
    pasteboard = FakePasteboard()

    assert _run(["copy-markdown", "1", "1"], safari, settings, pasteboard) == 0

    assert pasteboard.contents == {"public.utf8-plain-text": "[Example](https://example.example.com/)"}


def test_open_commands(settings: SafariSettings) -> None:
    safari = FakeSafari(windows=[make_window("A")])

    assert _run(["open-window", "https://example.org/"], safari, settings) == 0
    assert _run(["open-current", "https://example.net/"], safari, settings) == 0

    assert [window.tabs[0].url for window in safari.windows] == ["https://example.net/", "https://a.example.com/"]


def test_host_failure_includes_host_reason(capsys: pytest.CaptureFixture[str], settings: SafariSettings) -> None:
    class NotRunning(FakeSafari):
        def snapshot(self):
            raise HostError(
                "execution",
                "Command exited with status 1.",
                stderr="execution error: Error: Application isn't running.\n (-600)",
            )

    assert _run(["tabs"], NotRunning(), settings) == 1

    output = capsys.readouterr().out
    assert output.count("\n") == 1
    assert "Command exited with status 1." in output
    assert "Application isn't running. (-600)" in output

from __future__ import annotations

import pytest

from safari_mcp.addressing import WindowHandle, parse_index, resolve_tab, resolve_window
from safari_mcp.errors import HostError, InvalidIndexFormat, TabNotFound, WindowNotFound

from fakes import FakeSafari, make_window


def _safari() -> FakeSafari:
    return FakeSafari(windows=[make_window("One", "Two", "Three", current=2), make_window("Solo")])


@pytest.mark.parametrize("raw", ["1", " 2 ", 3, "0", "-1"])
def test_parse_index_accepts_integers(raw: object) -> None:
    assert parse_index(raw, "window") == int(str(raw).strip())


@pytest.mark.parametrize("raw", ["", "abc", "1.5", None, True, 2.0, "NaN", "1_000", "+1", "\u0663", "-"])
def test_parse_index_rejects_non_integers(raw: object) -> None:
    with pytest.raises(InvalidIndexFormat):
        parse_index(raw, "window")


@pytest.mark.parametrize("window_index", [1, 2])
def test_resolve_window_accepts_live_indices(window_index: int) -> None:
    assert resolve_window(_safari(), str(window_index)) == WindowHandle(index=window_index)


@pytest.mark.parametrize("window_index", [-1, 0, 3, 10])
def test_resolve_window_rejects_out_of_range(window_index: int) -> None:
    with pytest.raises(WindowNotFound) as excinfo:
        resolve_window(_safari(), window_index)
    assert excinfo.value.window_index == window_index


def test_resolve_window_rejects_bad_format_before_lookup() -> None:
    class ExplodingSafari(FakeSafari):
        def probe_window(self, window_index: int) -> None:
            raise AssertionError("lookup must not happen")

    with pytest.raises(InvalidIndexFormat):
        resolve_window(ExplodingSafari(), "front")


def test_resolve_window_propagates_non_lookup_host_errors() -> None:
    class BrokenSafari(FakeSafari):
        def probe_window(self, window_index: int) -> None:
            raise HostError("config", "Command '/usr/bin/osascript' was not found.")

    with pytest.raises(HostError) as excinfo:
        resolve_window(BrokenSafari(), 1)
    assert excinfo.value.error_type == "config"


def test_resolve_tab_returns_handle_with_active_flag() -> None:
    safari = _safari()
    window = resolve_window(safari, 1)

    second = resolve_tab(safari, "2", window)
    third = resolve_tab(safari, 3, window)

    assert second.title == "Two"
    assert second.url == "https://two.example.com/"
    assert second.window_index == 1
    assert second.active is True
    assert third.active is False


@pytest.mark.parametrize("tab_index", [0, 4, -2])
def test_resolve_tab_reports_window_on_failure(tab_index: int) -> None:
    safari = _safari()
    window = resolve_window(safari, 2)

    with pytest.raises(TabNotFound) as excinfo:
        resolve_tab(safari, tab_index, window)

    assert excinfo.value.window_index == 2
    assert excinfo.value.tab_index == tab_index
    assert str(excinfo.value) == f"Invalid tab for window 2: {tab_index}"

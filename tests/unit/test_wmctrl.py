"""Unit tests for the wmctrl command-line backend."""

from __future__ import annotations

import subprocess
from types import SimpleNamespace

import pytest

from autostarter.common.errors import AutostartError
from autostarter.common.types import Geometry, ScreenResolution, WindowRecord
from autostarter.wmctrl.backend import WmctrlWindowManager

WMCTRL_LP = """\
0x01e00003 -1 1203   mybox Desktop
0x03a00003  0 2811   mybox user@mybox: ~/src
0x04200007  1 0      mybox
0x04400003  0 3305   mybox Inbox - Mozilla Thunderbird
"""

XRANDR_CURRENT = """\
Screen 0: minimum 320 x 200, current 1920 x 1080, maximum 16384 x 16384
eDP-1 connected primary 1920x1080+0+0 (normal left inverted right x axis y axis)
"""


@pytest.fixture
def fake_run(monkeypatch):
    """Replace subprocess.run with a recorder returning scripted stdout."""
    calls: list[tuple[list[str], dict]] = []
    outputs: dict[str, str] = {}

    def _run(args, **kwargs):
        calls.append((args, kwargs))
        return SimpleNamespace(stdout=outputs.get(args[0] + " " + args[1], ""), returncode=0)

    monkeypatch.setattr("autostarter.wmctrl.backend.subprocess.run", _run)
    return SimpleNamespace(calls=calls, outputs=outputs)


class TestWmctrlDirectory:
    """Parsing wmctrl -lp."""

    def test_windows_list_parses_lines(self, fake_run) -> None:
        fake_run.outputs["wmctrl -lp"] = WMCTRL_LP

        records = WmctrlWindowManager().windows_list()

        assert records == [
            WindowRecord(window_id="0x01e00003", owner_pid=1203, title="Desktop"),
            WindowRecord(window_id="0x03a00003", owner_pid=2811, title="user@mybox: ~/src"),
            WindowRecord(window_id="0x04200007", owner_pid=0, title=""),
            WindowRecord(
                window_id="0x04400003", owner_pid=3305, title="Inbox - Mozilla Thunderbird"
            ),
        ]

    def test_empty_output_is_empty_directory(self, fake_run) -> None:
        assert WmctrlWindowManager().windows_list() == []


class TestWmctrlControl:
    """Commands issued for placement."""

    def test_geometry_command(self, fake_run) -> None:
        WmctrlWindowManager().windowGeometry_set(
            "0x03a00003", Geometry(x=0, y=0, width=960, height=1080)
        )

        assert fake_run.calls[0][0] == [
            "wmctrl", "-i", "-r", "0x03a00003", "-e", "0,0,0,960,1080"
        ]

    def test_unchanged_fields_pass_through(self, fake_run) -> None:
        WmctrlWindowManager().windowGeometry_set(
            "0x03a00003", Geometry(x=-1, y=-1, width=960, height=-1)
        )

        assert fake_run.calls[0][0][-1] == "0,-1,-1,960,-1"

    def test_geometry_formats_int_ids(self, fake_run) -> None:
        WmctrlWindowManager().windowGeometry_set(0x3A00003, Geometry(x=5, y=6, width=7, height=8))

        assert fake_run.calls[0][0][3] == "0x03a00003"

    def test_viewport_command(self, fake_run) -> None:
        WmctrlWindowManager().viewport_move(1920, 0)

        assert fake_run.calls[0][0] == ["wmctrl", "-o", "1920,0"]

    def test_display_name_is_exported(self, fake_run) -> None:
        WmctrlWindowManager(display_name=":1").viewport_move(0, 0)

        assert fake_run.calls[0][1]["env"]["DISPLAY"] == ":1"


class TestWmctrlResolution:
    """Parsing xrandr --current."""

    def test_current_size(self, fake_run) -> None:
        fake_run.outputs["xrandr --current"] = XRANDR_CURRENT

        assert WmctrlWindowManager().screenResolution_get() == ScreenResolution(
            width=1920, height=1080
        )

    def test_unparsable_output_is_fatal(self, fake_run) -> None:
        fake_run.outputs["xrandr --current"] = "Can't open display"

        with pytest.raises(AutostartError, match="screen resolution"):
            WmctrlWindowManager().screenResolution_get()


class TestWmctrlFailures:
    """Command failures become fatal errors."""

    def test_missing_binary(self, monkeypatch) -> None:
        def _run(args, **kwargs):
            raise FileNotFoundError(args[0])

        monkeypatch.setattr("autostarter.wmctrl.backend.subprocess.run", _run)

        with pytest.raises(AutostartError, match="wmctrl is not installed"):
            WmctrlWindowManager().windows_list()

    def test_non_zero_exit(self, monkeypatch) -> None:
        def _run(args, **kwargs):
            raise subprocess.CalledProcessError(1, args, output="", stderr="Cannot get client list")

        monkeypatch.setattr("autostarter.wmctrl.backend.subprocess.run", _run)

        with pytest.raises(AutostartError, match="Cannot get client list"):
            WmctrlWindowManager().viewport_move(0, 0)

"""Pytest configuration and shared fixtures for autostarter tests

This module provides fake collaborators (window manager, sleep) used across
the unit tests so no test needs a running X server or real delays.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

import pytest

from autostarter.common.types import Geometry, ScreenResolution, WindowRecord


class FakeWindowManager:
    """Scripted window manager recording every control call.

    listings is consumed one entry per windows_list() call; the last entry
    repeats once the script runs out.
    """

    def __init__(
        self,
        listings: Optional[list[list[WindowRecord]]] = None,
        resolution: ScreenResolution = ScreenResolution(width=1920, height=1080),
    ) -> None:
        self.listings: list[list[WindowRecord]] = listings or [[]]
        self.resolution = resolution
        self.list_calls: int = 0
        self.geometry_calls: list[tuple[object, Geometry]] = []
        self.viewport_calls: list[tuple[int, int]] = []
        self.connected: bool = False
        self.closed: bool = False

    def connection_establish(self) -> None:
        self.connected = True

    def connection_close(self) -> None:
        self.closed = True

    def screenResolution_get(self) -> ScreenResolution:
        return self.resolution

    def windows_list(self) -> list[WindowRecord]:
        index = min(self.list_calls, len(self.listings) - 1)
        self.list_calls += 1
        return list(self.listings[index])

    def windowGeometry_set(self, window_id: object, geometry: Geometry) -> None:
        self.geometry_calls.append((window_id, geometry))

    def viewport_move(self, x: int, y: int) -> None:
        self.viewport_calls.append((x, y))

    @property
    def control_calls(self) -> int:
        """Number of directory/geometry/viewport requests made"""
        return self.list_calls + len(self.geometry_calls) + len(self.viewport_calls)


class RecordingSleep:
    """Sleep replacement that records requested durations"""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_wm() -> FakeWindowManager:
    """Window manager with an empty directory"""
    return FakeWindowManager()


@pytest.fixture
def make_wm() -> Callable[..., FakeWindowManager]:
    """Factory for scripted window managers"""
    return FakeWindowManager


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Sleep that returns immediately"""
    return RecordingSleep()


@pytest.fixture
def window() -> Callable[..., WindowRecord]:
    """Factory for WindowRecord values"""

    def _make(window_id: object, pid: int, title: str = "") -> WindowRecord:
        return WindowRecord(window_id=window_id, owner_pid=pid, title=title)

    return _make


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Write YAML text to a temporary config file and return its path"""

    def _write(text: str) -> Path:
        path = tmp_path / "autostarter.yml"
        path.write_text(text)
        return path

    return _write


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)


# Markers for test organization
def pytest_configure(config) -> None:
    """Register custom pytest markers used by this test suite."""
    config.addinivalue_line("markers", "requires_x11: mark test as requiring X11 display")

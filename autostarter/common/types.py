"""Common types and data structures for autostarter"""

from dataclasses import dataclass
from typing import Optional, Union

WindowId = Union[int, str]
"""Opaque window handle: X11 window id (ewmh) or hex string (wmctrl)"""


@dataclass(frozen=True)
class WindowRecord:
    """One entry of the window manager's client list"""
    window_id: WindowId
    owner_pid: int  # 0 when the window does not advertise a pid
    title: str


@dataclass(frozen=True)
class LaunchResult:
    """Spawned application process"""
    pid: int
    command_line: tuple[str, ...]


@dataclass(frozen=True)
class ResolvedWindow:
    """Window selected for a launched process

    matched is True when the window was found by pid, False when the
    last-listed window was taken as a fallback.
    """
    window_id: Optional[WindowId]
    matched: bool


GEOMETRY_UNCHANGED = -1
"""Geometry field value that keeps the window's current value (wmctrl -e convention)"""


@dataclass(frozen=True)
class Geometry:
    """Window position and size in pixels

    Any field set to GEOMETRY_UNCHANGED leaves that value as it is.
    """
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        for size in (self.width, self.height):
            if size <= 0 and size != GEOMETRY_UNCHANGED:
                raise ValueError(
                    f"Geometry size must be positive or {GEOMETRY_UNCHANGED}, "
                    f"got {self.width}x{self.height}"
                )


@dataclass(frozen=True)
class WorkspaceGrid:
    """Virtual desktop layout as columns x rows of screen-sized viewports"""
    columns: int
    rows: int

    def __post_init__(self) -> None:
        if self.columns < 1 or self.rows < 1:
            raise ValueError(
                f"Workspace grid needs at least one column and row, "
                f"got {self.columns}x{self.rows}"
            )


@dataclass(frozen=True)
class ScreenResolution:
    """Screen dimensions, used as the step-sequence lookup key"""
    width: int
    height: int

    @property
    def key(self) -> str:
        """Resolution string such as '1920x1080'"""
        return f"{self.width}x{self.height}"

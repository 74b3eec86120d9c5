"""Window and viewport placement."""

from __future__ import annotations

import logging
import time
from typing import Callable

from autostarter.common.settings import settings
from autostarter.common.types import Geometry, ScreenResolution, WindowId, WorkspaceGrid
from autostarter.wm.backend import WindowManagerControl

logger = logging.getLogger(__name__)


def workspaceOffset_compute(
    workspace_index: int, grid: WorkspaceGrid, screen: ScreenResolution
) -> tuple[int, int]:
    """
    Translate a workspace index into an absolute viewport offset.

    The column comes from index modulo columns, while the row divides by
    rows rather than columns. Existing layouts depend on that asymmetry, so
    it is kept as is.

    Args:
        workspace_index: Zero-based workspace number.
        grid: Workspace grid dimensions.
        screen: Screen resolution, the size of one workspace.

    Returns:
        (x, y) pixel offset on the virtual desktop.
    """
    if workspace_index < 0:
        raise ValueError(f"Workspace index must not be negative, got {workspace_index}")
    x = (workspace_index % grid.columns) * screen.width
    y = (workspace_index // grid.rows) * screen.height
    return x, y


class PlacementEngine:
    """Applies viewport and window geometry changes through the window manager."""

    def __init__(
        self,
        window_manager: WindowManagerControl,
        settle_seconds: float = settings.DEFAULT_SETTLE_SEC,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize placement engine.

        Args:
            window_manager: Control backend receiving the requests.
            settle_seconds: Pause after each geometry change.
            sleep: Sleep function, replaced in tests.
        """
        self._window_manager = window_manager
        self._settle_seconds = settle_seconds
        self._sleep = sleep

    def workspaceOrigin_move(
        self, workspace_index: int, grid: WorkspaceGrid, screen: ScreenResolution
    ) -> None:
        """
        Switch the viewport to a workspace.

        Args:
            workspace_index: Zero-based workspace number.
            grid: Workspace grid dimensions.
            screen: Screen resolution.
        """
        x, y = workspaceOffset_compute(workspace_index, grid, screen)
        logger.info(f"Switching to workspace {workspace_index} (viewport {x},{y})")
        self._window_manager.viewport_move(x, y)

    def window_place(self, window_id: WindowId, geometry: Geometry) -> None:
        """
        Move and resize a window, then give the window manager time to apply it.

        Args:
            window_id: Target window.
            geometry: New position and size.
        """
        logger.info(
            f"Placing window {window_id} at {geometry.x},{geometry.y} "
            f"size {geometry.width}x{geometry.height}"
        )
        self._window_manager.windowGeometry_set(window_id, geometry)
        self._sleep(self._settle_seconds)

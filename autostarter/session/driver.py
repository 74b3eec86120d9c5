"""
Session step driver.

This module runs a resolution's step sequence strictly in order. The only
state carried between steps is the current window id, set by each run step
and read by position steps.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Union

from autostarter.common.config import PositionStep, RunStep, Step, WorkspaceStep
from autostarter.common.errors import AutostartError
from autostarter.common.types import (
    Geometry,
    ResolvedWindow,
    ScreenResolution,
    WindowId,
    WorkspaceGrid,
)
from autostarter.session.correlator import WindowCorrelator
from autostarter.session.launcher import ProcessLauncher
from autostarter.session.placement import PlacementEngine

__all__ = ["SessionDriver"]

logger = logging.getLogger(__name__)


class SessionDriver:
    """Executes run/position/workspace steps against the window manager."""

    def __init__(
        self,
        launcher: ProcessLauncher,
        correlator: WindowCorrelator,
        placement: PlacementEngine,
        grid: WorkspaceGrid,
        screen: ScreenResolution,
    ) -> None:
        """
        Initialize driver.

        Args:
            launcher:
                Spawns applications.
            correlator:
                Maps launched pids to windows.
            placement:
                Applies geometry and viewport changes.
            grid:
                Workspace grid for workspace steps.
            screen:
                Detected screen resolution.
        """
        self._launcher = launcher
        self._correlator = correlator
        self._placement = placement
        self._grid = grid
        self._screen = screen
        self.current_window_id: Optional[WindowId] = None

    def app_run(self, command_line: Union[str, Sequence[str]]) -> ResolvedWindow:
        """
        Launch an application and make its window the current window.

        The current window id is replaced even when the window was only
        picked by the fallback heuristic.

        Args:
            command_line: Command to launch.

        Returns:
            Correlation result for the launched process.
        """
        launch = self._launcher.process_launch(command_line)
        logger.info(f"Waiting for a window from pid {launch.pid}")
        resolved = self._correlator.window_resolve(launch.pid)
        self.current_window_id = resolved.window_id
        return resolved

    def window_position(self, geometry: Geometry) -> None:
        """
        Place the current window.

        Args:
            geometry: New position and size.

        Raises:
            AutostartError: If no window has been resolved yet.
        """
        if self.current_window_id is None:
            raise AutostartError(
                "Cannot position a window: no application window has been resolved yet"
            )
        self._placement.window_place(self.current_window_id, geometry)

    def workspace_switch(self, index: int) -> None:
        """
        Move the viewport to a workspace.

        Args:
            index: Zero-based workspace number.
        """
        self._placement.workspaceOrigin_move(index, self._grid, self._screen)

    def step_run(self, step: Step) -> None:
        """
        Dispatch one step.

        Args:
            step: Parsed config step.
        """
        if isinstance(step, RunStep):
            self.app_run(step.command_line)
        elif isinstance(step, PositionStep):
            self.window_position(step.geometry)
        elif isinstance(step, WorkspaceStep):
            self.workspace_switch(step.index)
        else:
            raise TypeError(f"Unknown step type: {type(step).__name__}")

    def steps_run(self, steps: Iterable[Step]) -> None:
        """
        Execute steps in order, stopping at the first fatal error.

        Args:
            steps: Step sequence for the detected resolution.
        """
        for number, step in enumerate(steps, start=1):
            logger.debug(f"Step {number}: {step}")
            self.step_run(step)

"""Window manager control protocol."""

from __future__ import annotations

from typing import Protocol

from autostarter.common.types import Geometry, ScreenResolution, WindowId, WindowRecord


class WindowManagerControl(Protocol):
    """Narrow window manager interface: one method per control action."""

    def connection_establish(self) -> None:
        """Connect to the window manager."""

    def connection_close(self) -> None:
        """Release the window manager connection."""

    def screenResolution_get(self) -> ScreenResolution:
        """
        Get the current screen resolution.

        Returns:
            Root screen width and height.
        """

    def windows_list(self) -> list[WindowRecord]:
        """
        List managed windows in client-list order.

        Reflects live state on every call; an empty list is valid.

        Returns:
            Window records, oldest mapped first.
        """

    def windowGeometry_set(self, window_id: WindowId, geometry: Geometry) -> None:
        """
        Move and resize a window, leaving its state flags unchanged.

        Args:
            window_id: Target window.
            geometry: New position and size.
        """

    def viewport_move(self, x: int, y: int) -> None:
        """
        Move the active viewport to an absolute pixel offset.

        Args:
            x: Horizontal offset on the virtual desktop.
            y: Vertical offset on the virtual desktop.
        """

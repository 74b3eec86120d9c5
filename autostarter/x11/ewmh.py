"""EWMH window manager control over python-xlib.

Speaks the Extended Window Manager Hints directly instead of shelling out:
the client list and per-window pid/title properties form the window
directory, and geometry and viewport changes are root-window client
messages, the same requests wmctrl sends.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from Xlib import X, error as xerror
from Xlib.protocol import event as xevent

from autostarter.common.errors import AutostartError
from autostarter.common.types import (
    GEOMETRY_UNCHANGED,
    Geometry,
    ScreenResolution,
    WindowId,
    WindowRecord,
)
from autostarter.wm.backend import WindowManagerControl
from autostarter.x11.display import DisplayManager

logger = logging.getLogger(__name__)

# _NET_MOVERESIZE_WINDOW flags: bits 8-11 mark x, y, width, height as present
_MOVERESIZE_X = 1 << 8
_MOVERESIZE_Y = 1 << 9
_MOVERESIZE_WIDTH = 1 << 10
_MOVERESIZE_HEIGHT = 1 << 11
_GRAVITY_DEFAULT = 0

_CLIENT_MESSAGE_MASK = X.SubstructureRedirectMask | X.SubstructureNotifyMask


class EwmhWindowManager(WindowManagerControl):
    """Window manager control backed by EWMH root-window properties."""

    def __init__(
        self,
        display_name: Optional[str] = None,
        display_manager: Optional[DisplayManager] = None,
    ) -> None:
        """
        Initialize EWMH backend.

        Args:
            display_name: X11 display name, None for $DISPLAY.
            display_manager: Pre-built display manager (tests inject fakes).
        """
        self._display_manager = display_manager or DisplayManager(display_name=display_name)

    def connection_establish(self) -> None:
        """Open the X11 connection."""
        self._display_manager.connection_establish()

    def connection_close(self) -> None:
        """Close the X11 connection."""
        self._display_manager.connection_close()

    def screenResolution_get(self) -> ScreenResolution:
        """Return root window size."""
        return self._display_manager.screenResolution_get()

    def windows_list(self) -> list[WindowRecord]:
        """
        List client windows from _NET_CLIENT_LIST.

        Returns:
            Window records in client-list order.

        Raises:
            AutostartError: If the window manager does not publish a client list.
        """
        display = self._display_manager.display_get()
        root = display.screen().root

        client_list = root.get_full_property(
            self._display_manager.atom_get("_NET_CLIENT_LIST"), X.AnyPropertyType
        )
        if client_list is None:
            raise AutostartError(
                "Window manager does not support EWMH (_NET_CLIENT_LIST is not set)"
            )

        records: list[WindowRecord] = []
        for window_id in client_list.value:
            window = display.create_resource_object("window", int(window_id))
            try:
                records.append(
                    WindowRecord(
                        window_id=int(window_id),
                        owner_pid=self._windowPid_get(window),
                        title=self._windowTitle_get(window),
                    )
                )
            except xerror.BadWindow:
                # Closed between listing and property query
                logger.debug(f"Window 0x{int(window_id):08x} vanished while listing")
        return records

    def windowGeometry_set(self, window_id: WindowId, geometry: Geometry) -> None:
        """
        Send _NET_MOVERESIZE_WINDOW for a window.

        Fields equal to GEOMETRY_UNCHANGED are left out of the request flags,
        so the window manager keeps their current values.

        Args:
            window_id: X11 window id.
            geometry: New position and size.

        Raises:
            AutostartError: If the X server rejects the request.
        """
        flags = _GRAVITY_DEFAULT
        for flag, value in (
            (_MOVERESIZE_X, geometry.x),
            (_MOVERESIZE_Y, geometry.y),
            (_MOVERESIZE_WIDTH, geometry.width),
            (_MOVERESIZE_HEIGHT, geometry.height),
        ):
            if value != GEOMETRY_UNCHANGED:
                flags |= flag

        display = self._display_manager.display_get()
        window = display.create_resource_object("window", self._windowId_normalize(window_id))
        self._clientMessage_send(
            window,
            "_NET_MOVERESIZE_WINDOW",
            [
                flags,
                geometry.x,
                geometry.y,
                geometry.width,
                geometry.height,
            ],
        )

    def viewport_move(self, x: int, y: int) -> None:
        """
        Send _NET_DESKTOP_VIEWPORT to the root window.

        Args:
            x: Horizontal viewport offset.
            y: Vertical viewport offset.
        """
        root = self._display_manager.display_get().screen().root
        self._clientMessage_send(root, "_NET_DESKTOP_VIEWPORT", [x, y, 0, 0, 0])

    def _clientMessage_send(self, window: Any, message_type: str, data: list[int]) -> None:
        """
        Send a 32-bit client message to the root window on behalf of a window.

        Args:
            window: Window the message refers to.
            message_type: Atom name of the message.
            data: Five 32-bit values.
        """
        display = self._display_manager.display_get()
        root = display.screen().root
        message = xevent.ClientMessage(
            window=window,
            client_type=self._display_manager.atom_get(message_type),
            # CARD32 fields; negative coordinates go out as two's complement
            data=(32, [value & 0xFFFFFFFF for value in data]),
        )
        catcher = xerror.CatchError()
        try:
            root.send_event(message, event_mask=_CLIENT_MESSAGE_MASK, onerror=catcher)
            display.sync()
        except xerror.ConnectionClosedError as e:
            raise AutostartError(f"{message_type} failed: X connection closed") from e

        failure = catcher.get_error()
        if failure is not None:
            raise AutostartError(f"{message_type} failed: {failure}")

    def _windowPid_get(self, window: Any) -> int:
        """Read _NET_WM_PID, 0 if the window does not advertise one."""
        prop = window.get_full_property(
            self._display_manager.atom_get("_NET_WM_PID"), X.AnyPropertyType
        )
        if prop is None or len(prop.value) == 0:
            return 0
        return int(prop.value[0])

    def _windowTitle_get(self, window: Any) -> str:
        """Read _NET_WM_NAME, falling back to WM_NAME."""
        prop = window.get_full_property(
            self._display_manager.atom_get("_NET_WM_NAME"),
            self._display_manager.atom_get("UTF8_STRING"),
        )
        if prop is not None:
            value = prop.value
        else:
            value = window.get_wm_name()
        if value is None:
            return ""
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return str(value)

    @staticmethod
    def _windowId_normalize(window_id: WindowId) -> int:
        """Accept int ids and wmctrl-style hex strings."""
        if isinstance(window_id, str):
            return int(window_id, 0)
        return int(window_id)

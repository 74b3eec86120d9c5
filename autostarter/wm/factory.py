"""Window manager backend factory."""

from __future__ import annotations

from typing import Optional

from autostarter.wm.backend import WindowManagerControl

SUPPORTED_BACKENDS = ("ewmh", "wmctrl")


def windowManager_create(
    backend_name: str,
    display_name: Optional[str] = None,
) -> WindowManagerControl:
    """
    Create the window manager control backend.

    Args:
        backend_name: Backend identifier ("ewmh" or "wmctrl")
        display_name: X11 display name, None for $DISPLAY

    Returns:
        Unconnected backend instance
    """
    backend = backend_name.lower()

    if backend == "ewmh":
        from autostarter.x11.ewmh import EwmhWindowManager

        return EwmhWindowManager(display_name=display_name)

    if backend == "wmctrl":
        from autostarter.wmctrl.backend import WmctrlWindowManager

        return WmctrlWindowManager(display_name=display_name)

    raise ValueError(
        f"Unsupported backend '{backend_name}'. Supported: {', '.join(SUPPORTED_BACKENDS)}."
    )

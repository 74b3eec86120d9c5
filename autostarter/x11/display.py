"""X11 display connection and management"""

import logging
from typing import Optional

from Xlib import display as xdisplay, error as xerror
from Xlib.display import Display

from autostarter.common.errors import AutostartError
from autostarter.common.types import ScreenResolution

logger = logging.getLogger(__name__)


class DisplayManager:
    """Manages X11 display connection and screen information"""

    def __init__(self, display_name: Optional[str] = None) -> None:
        """
        Initialize display manager

        Args:
            display_name: X11 display name (e.g., ':0'), None for default
        """
        self._display: Optional[Display] = None
        self._display_name: Optional[str] = display_name
        self._atoms: dict[str, int] = {}

    def connection_establish(self) -> None:
        """
        Establish connection to X11 display

        Raises:
            AutostartError: If the display cannot be opened
        """
        if self._display is not None:
            return
        try:
            self._display = xdisplay.Display(self._display_name)
        except (xerror.DisplayError, xerror.ConnectionClosedError) as e:
            raise AutostartError(f"Cannot open X display {self._display_name or ''}: {e}") from e
        logger.debug(f"Connected to X display {self._display.get_display_name()}")

    def connection_close(self) -> None:
        """Close X11 display connection"""
        if self._display is not None:
            self._display.close()
            self._display = None
            self._atoms.clear()

    def display_get(self) -> Display:
        """
        Get X11 display object

        Returns:
            X11 Display object

        Raises:
            RuntimeError: If not connected to display
        """
        if self._display is None:
            raise RuntimeError("Not connected to X11 display")
        return self._display

    def atom_get(self, name: str) -> int:
        """
        Intern an atom, caching the result for the connection lifetime

        Args:
            name: Atom name such as '_NET_CLIENT_LIST'

        Returns:
            Atom id
        """
        atom = self._atoms.get(name)
        if atom is None:
            atom = self.display_get().intern_atom(name)
            self._atoms[name] = atom
        return atom

    def screenResolution_get(self) -> ScreenResolution:
        """
        Get screen geometry (dimensions) of the root window

        Returns:
            Screen resolution with width and height

        Raises:
            RuntimeError: If not connected to display
        """
        display = self.display_get()
        screen = display.screen()
        root = screen.root
        geom = root.get_geometry()

        return ScreenResolution(width=geom.width, height=geom.height)

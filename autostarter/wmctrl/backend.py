"""wmctrl command-line backend for window manager control."""

from __future__ import annotations

import logging
import os
import re
import subprocess
from typing import Optional

from autostarter.common.errors import AutostartError
from autostarter.common.types import Geometry, ScreenResolution, WindowId, WindowRecord
from autostarter.wm.backend import WindowManagerControl

logger = logging.getLogger(__name__)

_XRANDR_CURRENT_RE = re.compile(r"\bcurrent\s+(\d+)\s*x\s*(\d+)")


class WmctrlWindowManager(WindowManagerControl):
    """Window manager control by running wmctrl and xrandr."""

    def __init__(self, display_name: Optional[str] = None) -> None:
        """
        Initialize wmctrl backend.

        Args:
            display_name: X11 display name passed to the tools via $DISPLAY.
        """
        self._display_name: Optional[str] = display_name

    def connection_establish(self) -> None:
        """Nothing to connect; each call runs a fresh process."""

    def connection_close(self) -> None:
        """Nothing to release."""

    def screenResolution_get(self) -> ScreenResolution:
        """
        Parse the 'current WxH' size from xrandr.

        Returns:
            Current screen resolution.

        Raises:
            AutostartError: If xrandr output has no current size.
        """
        output = self._command_run(["xrandr", "--current"])
        match = _XRANDR_CURRENT_RE.search(output)
        if match is None:
            raise AutostartError("Cannot determine screen resolution from xrandr output")
        return ScreenResolution(width=int(match.group(1)), height=int(match.group(2)))

    def windows_list(self) -> list[WindowRecord]:
        """
        Parse `wmctrl -lp` output.

        Each line reads: id desktop pid host title...

        Returns:
            Window records in listing order.
        """
        output = self._command_run(["wmctrl", "-lp"])
        records: list[WindowRecord] = []
        for line in output.splitlines():
            fields = line.split(None, 4)
            if len(fields) < 4:
                continue
            try:
                pid = int(fields[2])
            except ValueError:
                logger.debug(f"Skipping unparsable wmctrl line: {line!r}")
                continue
            records.append(
                WindowRecord(
                    window_id=fields[0],
                    owner_pid=pid,
                    title=fields[4] if len(fields) > 4 else "",
                )
            )
        return records

    def windowGeometry_set(self, window_id: WindowId, geometry: Geometry) -> None:
        """Run `wmctrl -i -r <id> -e 0,x,y,w,h`."""
        if isinstance(window_id, int):
            window_id = f"0x{window_id:08x}"
        self._command_run(
            [
                "wmctrl",
                "-i",
                "-r",
                str(window_id),
                "-e",
                f"0,{geometry.x},{geometry.y},{geometry.width},{geometry.height}",
            ]
        )

    def viewport_move(self, x: int, y: int) -> None:
        """Run `wmctrl -o x,y`."""
        self._command_run(["wmctrl", "-o", f"{x},{y}"])

    def _command_run(self, args: list[str]) -> str:
        """
        Run a control command and return its stdout.

        Args:
            args: Command and arguments.

        Returns:
            Captured standard output.

        Raises:
            AutostartError: If the command is missing or exits non-zero.
        """
        env = None
        if self._display_name:
            env = dict(os.environ, DISPLAY=self._display_name)

        logger.debug(f"Running: {' '.join(args)}")
        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                check=True,
                env=env,
            )
        except FileNotFoundError as e:
            raise AutostartError(f"{args[0]} is not installed") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise AutostartError(
                f"{' '.join(args)} failed with exit code {e.returncode}: {stderr}"
            ) from e
        return result.stdout

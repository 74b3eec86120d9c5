"""Desktop notification sink."""

from __future__ import annotations

import logging
import subprocess
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Fire-and-forget user-visible messages."""

    def info_send(self, message: str) -> None:
        """Show an informational message."""

    def error_send(self, message: str) -> None:
        """Show an error message."""


class NotifySendNotifier:
    """Notifications through notify-send; failures are logged and dropped."""

    def __init__(self, app_name: str) -> None:
        self._app_name: str = app_name

    def info_send(self, message: str) -> None:
        self._notify(message, icon="information")

    def error_send(self, message: str) -> None:
        self._notify(message, icon="error")

    def _notify(self, message: str, icon: str) -> None:
        """
        Run notify-send for one message.

        Args:
            message: Notification body.
            icon: Freedesktop icon name.
        """
        try:
            subprocess.run(
                [
                    "notify-send",
                    "--urgency=normal",
                    f"--icon={icon}",
                    self._app_name,
                    message,
                ],
                check=True,
                capture_output=True,
                timeout=5,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"Notification failed: {e}")


class NullNotifier:
    """Notifier used with --disable-notifications."""

    def info_send(self, message: str) -> None:
        pass

    def error_send(self, message: str) -> None:
        pass

"""Detached application launcher."""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Sequence, Union

from autostarter.common.errors import AutostartError
from autostarter.common.types import LaunchResult

logger = logging.getLogger(__name__)


class ProcessLauncher:
    """Starts applications detached from the autostarter's terminal and session."""

    def process_launch(self, command_line: Union[str, Sequence[str]]) -> LaunchResult:
        """
        Spawn an application and return without waiting for it.

        The child gets the null device for all standard streams and its own
        session, so it neither blocks on our I/O nor receives signals aimed at
        our process group.

        Args:
            command_line: Argument list, or a shell-style string to split.

        Returns:
            Pid and arguments of the new process.

        Raises:
            AutostartError: If the command is empty or cannot be executed.
        """
        args = shlex.split(command_line) if isinstance(command_line, str) else list(command_line)
        if not args:
            raise AutostartError("Cannot launch an empty command")

        try:
            process = subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
                close_fds=True,
            )
        except OSError as e:
            raise AutostartError(f"Cannot launch {args[0]}: {e}") from e

        logger.info(f"Launched {' '.join(args)} (pid {process.pid})")
        return LaunchResult(pid=process.pid, command_line=tuple(args))

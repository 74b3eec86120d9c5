"""
Process to window correlation.

Window creation is asynchronous relative to process creation, so the
correlator polls the window directory until a window owned by the launched
pid shows up. Applications that start through wrappers or hand off to an
already running instance never produce a window with the launched pid; for
those the correlator gives up after its retry budget and takes the last
listed window instead.

That fallback is a heuristic, not a guarantee: when the target application
is slow to start under load it can select an unrelated window that was
already open.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from autostarter.common.settings import settings
from autostarter.common.types import ResolvedWindow, WindowRecord
from autostarter.wm.backend import WindowManagerControl

__all__ = ["WindowCorrelator"]

logger = logging.getLogger(__name__)


class WindowCorrelator:
    """Bounded polling of the window directory for a pid's window."""

    def __init__(
        self,
        window_manager: WindowManagerControl,
        retry_budget: int = settings.DEFAULT_RETRY_BUDGET,
        poll_interval: float = settings.DEFAULT_POLL_INTERVAL_SEC,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize correlator.

        Args:
            window_manager:
                Source of window directory listings.
            retry_budget:
                Maximum number of directory polls per resolve.
            poll_interval:
                Seconds slept between polls.
            sleep:
                Sleep function, replaced in tests to simulate time.

        Raises:
            ValueError: If the budget is below one or the interval negative.
        """
        if retry_budget < 1:
            raise ValueError(f"retry_budget must be at least 1, got {retry_budget}")
        if poll_interval < 0:
            raise ValueError(f"poll_interval must not be negative, got {poll_interval}")
        self._window_manager = window_manager
        self._retry_budget = retry_budget
        self._poll_interval = poll_interval
        self._sleep = sleep

    def window_resolve(self, pid: int) -> ResolvedWindow:
        """
        Find the window created by a process.

        Args:
            pid: Process id returned by the launcher.

        Returns:
            The last listed window owned by pid (matched=True), or after the
            budget is spent the last window of the final listing
            (matched=False, window_id None if nothing is listed).
        """
        records: list[WindowRecord] = []
        for attempt in range(1, self._retry_budget + 1):
            records = self._window_manager.windows_list()
            match = self._pidMatch_find(records, pid)
            if match is not None:
                logger.info(
                    f"Window {self._windowId_format(match.window_id)} belongs to pid {pid} "
                    f"(attempt {attempt}): {match.title!r}"
                )
                return ResolvedWindow(window_id=match.window_id, matched=True)

            logger.debug(f"No window for pid {pid} yet (attempt {attempt}/{self._retry_budget})")
            if attempt < self._retry_budget:
                self._sleep(self._poll_interval)

        return self._fallback_select(records, pid)

    def _fallback_select(self, records: list[WindowRecord], pid: int) -> ResolvedWindow:
        """Take the last listed window once the retry budget is spent."""
        if not records:
            logger.warning(f"No window for pid {pid} and no windows listed at all")
            return ResolvedWindow(window_id=None, matched=False)

        last = records[-1]
        logger.warning(
            f"No window for pid {pid} after {self._retry_budget} attempts, "
            f"using last listed window {self._windowId_format(last.window_id)}: {last.title!r}"
        )
        return ResolvedWindow(window_id=last.window_id, matched=False)

    @staticmethod
    def _pidMatch_find(records: list[WindowRecord], pid: int) -> Optional[WindowRecord]:
        """Return the last record owned by pid, in directory order."""
        match: Optional[WindowRecord] = None
        for record in records:
            if record.owner_pid == pid:
                match = record
        return match

    @staticmethod
    def _windowId_format(window_id: object) -> str:
        if isinstance(window_id, int):
            return f"0x{window_id:08x}"
        return str(window_id)

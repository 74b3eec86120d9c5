"""Application settings singleton - single source of process constants

This module provides a singleton Settings class holding the constants shared
across the application: exit codes, default timings and the notification name.

Usage:
    from autostarter.common.settings import settings

    sys.exit(settings.FATAL_EXIT_CODE)
"""

from typing import Optional


class Settings:
    """Singleton holding application constants"""

    _instance: Optional["Settings"] = None

    def __new__(cls) -> "Settings":
        """Ensure only one Settings instance exists"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    # =========================================================================
    # Process Constants
    # =========================================================================

    FATAL_EXIT_CODE: int = 244
    """Exit status for any fatal session error

    Same status as the shell autostarter used.
    """

    NOTIFICATION_APP_NAME: str = "Autostarter"
    """Summary line used for desktop notifications"""

    # =========================================================================
    # Correlation and Placement Defaults
    # =========================================================================

    DEFAULT_RETRY_BUDGET: int = 10
    """Directory polls before falling back to the last-listed window"""

    DEFAULT_POLL_INTERVAL_SEC: float = 0.5
    """Pause between directory polls (seconds)

    With the default budget the worst-case wait per launch is about 5s.
    """

    DEFAULT_SETTLE_SEC: float = 0.5
    """Pause after a geometry change before the next step runs (seconds)"""


# Global singleton instance
settings = Settings()
"""Global settings singleton instance

Import this anywhere in the application:
    from autostarter.common.settings import settings
"""

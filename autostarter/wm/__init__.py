"""Window manager control abstraction."""

from autostarter.wm.backend import WindowManagerControl
from autostarter.wm.factory import SUPPORTED_BACKENDS, windowManager_create

__all__ = [
    "SUPPORTED_BACKENDS",
    "WindowManagerControl",
    "windowManager_create",
]

"""autostarter session entry point"""

import argparse
import logging
import signal
import time
from pathlib import Path
from typing import Any, Optional

import yaml

from autostarter.common.config import Config, ConfigLoader
from autostarter.common.errors import AutostartError
from autostarter.common.settings import settings
from autostarter.session.correlator import WindowCorrelator
from autostarter.session.driver import SessionDriver
from autostarter.session.launcher import ProcessLauncher
from autostarter.session.notifier import Notifier, NotifySendNotifier, NullNotifier
from autostarter.session.placement import PlacementEngine
from autostarter.session.session_logging import logging_setup, logging_teardown
from autostarter.wm.backend import WindowManagerControl
from autostarter.wm.factory import windowManager_create

logger = logging.getLogger(__name__)


def sigterm_handle(signum: int, _frame: Any) -> None:
    """Turn SIGTERM into the same shutdown path as Ctrl-C"""
    raise KeyboardInterrupt(f"signal {signum}")


def notifier_create(enabled: bool, app_name: str) -> Notifier:
    """
    Select the notification sink

    Args:
        enabled: False for --disable-notifications or config opt-out
        app_name: Notification summary line

    Returns:
        notify-send notifier, or a no-op one when disabled
    """
    if enabled:
        return NotifySendNotifier(app_name)
    return NullNotifier()


def config_resolve(args: argparse.Namespace) -> Config:
    """
    Load the config file named on the command line or found by search

    Args:
        args: Parsed CLI arguments

    Returns:
        Loaded config with CLI overrides applied

    Raises:
        AutostartError: If the file is missing, unreadable or invalid
    """
    config_path: Optional[Path] = Path(args.config).expanduser() if args.config else None
    display_path = config_path or " or ".join(ConfigLoader.DEFAULT_CONFIG_PATHS)
    try:
        config = ConfigLoader.configWithOverrides_load(
            file_path=config_path,
            backend=getattr(args, "backend", None),
            display=getattr(args, "display", None),
            notifications_enabled=not args.disable_notifications,
        )
    except (FileNotFoundError, PermissionError, IsADirectoryError) as e:
        raise AutostartError(f"The configfile {display_path} is not readable.") from e
    except yaml.YAMLError as e:
        raise AutostartError(f"The configfile {display_path} is not valid YAML: {e}") from e
    except KeyError as e:
        raise AutostartError(
            f"The configfile {display_path} is missing the {e.args[0]!r} section."
        ) from e
    except (TypeError, ValueError) as e:
        raise AutostartError(f"The configfile {display_path} is invalid: {e}") from e
    return config


def session_execute(
    config: Config, window_manager: WindowManagerControl, notifier: Notifier
) -> None:
    """
    Detect the resolution and run its step sequence

    Args:
        config: Loaded configuration
        window_manager: Connected control backend
        notifier: Notification sink

    Raises:
        AutostartError: On a missing resolution section or failed step
    """
    screen = window_manager.screenResolution_get()
    logger.info(f"Detected screen resolution {screen.key}")

    steps = config.steps_get(screen.key)
    if steps is None:
        raise AutostartError(
            f"Please define a section named '{screen.key}' under 'resolutions' inside your "
            f"config file to configure autostart applications for this resolution."
        )

    driver = SessionDriver(
        launcher=ProcessLauncher(),
        correlator=WindowCorrelator(
            window_manager,
            retry_budget=config.correlation.retry_budget,
            poll_interval=config.correlation.poll_interval_seconds,
            sleep=time.sleep,
        ),
        placement=PlacementEngine(
            window_manager,
            settle_seconds=config.placement.settle_seconds,
            sleep=time.sleep,
        ),
        grid=config.workspaces,
        screen=screen,
    )
    driver.steps_run(steps)

    message = f"Autostart for {screen.key} finished ({len(steps)} steps)"
    logger.info(message)
    notifier.info_send(message)


def session_run(args: argparse.Namespace) -> int:
    """
    Run one autostart session

    Every fatal error is logged, sent as an error notification unless
    notifications are disabled, and turned into the fatal exit code.
    Logging handlers and the display connection are released on every
    exit path, including interrupts.

    Args:
        args: Parsed CLI arguments

    Returns:
        Process exit code
    """
    log_level: str = getattr(args, "log_level", None) or "INFO"
    handlers = logging_setup(log_level, ConfigLoader.DEFAULT_LOG_FORMAT, None)
    previous_sigterm = signal.signal(signal.SIGTERM, sigterm_handle)

    notifier = notifier_create(not args.disable_notifications, settings.NOTIFICATION_APP_NAME)
    window_manager: Optional[WindowManagerControl] = None
    exit_code = 0
    try:
        config = config_resolve(args)

        # Bootstrap handlers stay attached until the configured ones are open
        configured_handlers = logging_setup(
            getattr(args, "log_level", None) or config.logging.level,
            config.logging.format,
            config.logging.file,
        )
        logging_teardown(handlers)
        handlers = configured_handlers
        notifier = notifier_create(
            config.notifications.enabled, config.notifications.app_name
        )

        window_manager = windowManager_create(config.backend.name, config.backend.display)
        window_manager.connection_establish()
        session_execute(config, window_manager, notifier)

    except (AutostartError, ValueError) as e:
        logger.error(f"[!] {e}")
        notifier.error_send(str(e))
        exit_code = settings.FATAL_EXIT_CODE
    except KeyboardInterrupt:
        logger.info("Interrupted, abandoning remaining steps")
    finally:
        if window_manager is not None:
            window_manager.connection_close()
        signal.signal(signal.SIGTERM, previous_sigterm)
        logging_teardown(handlers)

    return exit_code

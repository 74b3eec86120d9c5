"""autostarter command-line interface"""

import argparse
import sys
from typing import NoReturn, Optional, Sequence

from autostarter import __version__
from autostarter.wm.factory import SUPPORTED_BACKENDS

USAGE_EPILOG = """\
The config file (YAML) maps screen resolutions such as "1920x1080" to a list
of steps: `run: <command>`, `position: [x, y, width, height]` and
`workspace: <index>`. Exit status is 244 on any fatal error.
"""


def parser_create() -> argparse.ArgumentParser:
    """
    Create the argument parser

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="autostarter",
        description="Launch applications and place their windows for the current screen resolution",
        epilog=USAGE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )

    parser.add_argument("--version", action="version", version=f"autostarter {__version__}")

    parser.add_argument(
        "--disable-notifications",
        action="store_true",
        dest="disable_notifications",
        help="Don't use notify-send to display messages as desktop notifications",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="FILE",
        help="Use a special configuration file (default: ~/.autostarter.yml)",
    )

    parser.add_argument(
        "--display", type=str, default=None, help="X11 display name (overrides config)"
    )

    parser.add_argument(
        "--backend",
        type=str,
        choices=list(SUPPORTED_BACKENDS),
        default=None,
        help="Window manager control backend (overrides config, default: ewmh)",
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging (overrides config)"
    )

    parser.add_argument(
        "--info", action="store_true", help="Enable info logging (overrides config)"
    )

    parser.add_argument(
        "--warning", action="store_true", help="Enable warning logging (overrides config)"
    )

    parser.add_argument(
        "--error", action="store_true", help="Enable error logging (overrides config)"
    )

    return parser


def arguments_parse(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments

    Unknown arguments are ignored rather than rejected, matching the shell
    autostarter this replaces.

    Args:
        argv: Argument list, None for sys.argv[1:].

    Returns:
        Parsed CLI arguments.
    """
    args, _unknown = parser_create().parse_known_args(argv)
    setattr(args, "log_level", logLevelOverride_get(args))
    return args


def logLevelOverride_get(args: argparse.Namespace) -> str | None:
    """
    Resolve explicit log level override flags.

    Args:
        args: Parsed CLI args.

    Returns:
        Most restrictive selected log level, or None.
    """
    if args.error:
        return "ERROR"
    if args.warning:
        return "WARNING"
    if args.info:
        return "INFO"
    if args.debug:
        return "DEBUG"
    return None


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main entry point for the autostarter command

    Args:
        argv: Argument list, None for sys.argv[1:].
    """
    args = arguments_parse(argv)

    from autostarter.session.main import session_run

    sys.exit(session_run(args))


if __name__ == "__main__":
    main()

"""CLI entry point for the wake monitor.

Usage:
    monitor-wake
    monitor-wake --unix-timestamp
    python -m monitor_wake --timestamp
"""

import argparse
import sys
from typing import Callable, NoReturn, Optional, TextIO

from . import __version__, configure_logging
from .bus_session import BusSession, PydbusSession
from .config import MonitorConfig
from .errors import MonitorWakeError
from .models import OutputMode
from .monitor import WakeMonitor
from .notifier import WakeNotifier

EXIT_USAGE = 1
EXIT_FATAL = 1
EXIT_INTERRUPTED = 130


class UsageArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits 1 on usage errors and points at --help."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(
            EXIT_USAGE,
            f"{self.prog}: error: {message}\n"
            f"Try '{self.prog} --help' for more information.\n",
        )


def build_parser() -> argparse.ArgumentParser:
    parser = UsageArgumentParser(
        prog="monitor-wake",
        description="Print a line every time the system resumes from sleep",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        add_help=False,
        epilog="""
Examples:
  %(prog)s
      Print "woken" on every resume

  %(prog)s --unix-timestamp
      Print the resume time as seconds since the epoch

  %(prog)s --timestamp | tee -a ~/wake.log
      Append human-readable resume times to a log
""",
    )

    modes = parser.add_mutually_exclusive_group()
    modes.add_argument(
        "-u",
        "--unix-timestamp",
        dest="mode",
        action="store_const",
        const=OutputMode.UNIX_TIMESTAMP,
        help="Print the epoch time instead of 'woken'",
    )
    modes.add_argument(
        "-t",
        "--timestamp",
        dest="mode",
        action="store_const",
        const=OutputMode.HUMAN_TIMESTAMP,
        help="Print the local time instead of 'woken'",
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-h",
        "--help",
        action="help",
        help="Show this help message and exit",
    )

    parser.set_defaults(mode=OutputMode.PLAIN)
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    At most one argument is accepted.

    Args:
        argv: Command-line arguments. Defaults to sys.argv[1:].

    Returns:
        Parsed arguments namespace.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    if len(argv) > 1:
        parser.error("too many arguments")

    return parser.parse_args(argv)


def main(
    argv: list[str] | None = None,
    session_factory: Callable[[], BusSession] = PydbusSession,
    stream: Optional[TextIO] = None,
    clock: Optional[Callable[[], float]] = None,
) -> int:
    """Main entry point for the wake monitor.

    Args:
        argv: Command-line arguments. Defaults to sys.argv[1:].
        session_factory: Builds the bus session (replaced in tests).
        stream: Destination for wake lines. Defaults to stdout.
        clock: Source of the epoch time for timestamps. Defaults to time.time.

    Returns:
        Exit code. Only returned on failure or interrupt; a healthy
        monitor runs until it is killed.
    """
    args = parse_args(argv)
    config = MonitorConfig(mode=args.mode)

    logger = configure_logging(config.log_level)

    session = session_factory()
    monitor = WakeMonitor(
        session=session,
        notifier=WakeNotifier(config.mode, stream=stream, clock=clock),
        config=config,
    )

    try:
        monitor.run()
    except MonitorWakeError as e:
        logger.error("%s", e)
        return EXIT_FATAL
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        return EXIT_INTERRUPTED
    finally:
        session.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())

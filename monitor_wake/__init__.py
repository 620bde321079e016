"""Suspend/resume monitor for the system D-Bus.

This package listens for logind's PrepareForSleep signal on the system
bus and prints one line each time the machine resumes from sleep.

Architecture:
    - Bus session owning the pydbus connection and the match rule
    - Single-threaded monitor loop draining the session queue
    - Wake lines written to stdout, diagnostics to stderr via logging

Modules:
    - models: Pydantic data models (BusMessage, SubscriptionFilter, DecodeResult)
    - errors: Fatal startup exceptions
    - config: MonitorConfig constants
    - bus_session: BusSession interface and pydbus implementation
    - notifier: Output line formatting per mode
    - monitor: Main loop
"""

import logging
import sys

__version__ = "0.1.0"
__author__ = "vpittamp"

# Package-level exports
__all__ = [
    "__version__",
    "configure_logging",
]


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
) -> logging.Logger:
    """Configure package-level logging.

    All records go to stderr so that stdout only ever carries wake lines.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string. Defaults to standard format
            with timestamp, level, module, and message.

    Returns:
        Configured logger instance for the monitor_wake package.

    Example:
        >>> from monitor_wake import configure_logging
        >>> logger = configure_logging("DEBUG")
        >>> logger.debug("Starting monitor...")
    """
    if format_string is None:
        format_string = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

    logger = logging.getLogger("monitor_wake")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)

    return logger

"""Wake line output.

This module renders and writes the single line printed for each resume
event. Lines go to stdout; when stdout is a pipe or a file they are
flushed immediately so that downstream readers see them without delay.
"""

import logging
import sys
import time
from datetime import datetime
from typing import Callable, Optional, TextIO

from .models import OutputMode

logger = logging.getLogger(__name__)

PLAIN_LINE = "woken"

# Digits and punctuation only, so the result is the same in every locale
HUMAN_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"


def format_wake_line(mode: OutputMode, now: float) -> str:
    """Render the wake line for an output mode.

    Args:
        mode: Selected output mode.
        now: Current time as seconds since the epoch.

    Returns:
        Line text without the trailing newline.
    """
    if mode == OutputMode.UNIX_TIMESTAMP:
        return str(int(now))
    if mode == OutputMode.HUMAN_TIMESTAMP:
        return datetime.fromtimestamp(now).astimezone().strftime(HUMAN_TIMESTAMP_FORMAT)
    return PLAIN_LINE


class WakeNotifier:
    """Write one line per resume event.

    Example:
        >>> notifier = WakeNotifier(OutputMode.UNIX_TIMESTAMP)
        >>> notifier.emit()
        1792400000
    """

    def __init__(
        self,
        mode: OutputMode = OutputMode.PLAIN,
        stream: Optional[TextIO] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize notifier.

        Args:
            mode: Output mode selected at startup.
            stream: Destination stream. Defaults to sys.stdout at emit time.
            clock: Source of the current epoch time. Defaults to time.time.
        """
        self.mode = mode
        self._stream = stream
        self._clock = clock or time.time

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def emit(self) -> str:
        """Write the wake line for the current time.

        Returns:
            The line written, without newline.
        """
        line = format_wake_line(self.mode, self._clock())
        stream = self.stream
        stream.write(line + "\n")

        if not _is_interactive(stream):
            stream.flush()

        logger.debug("Wake line written: %s", line)
        return line


def _is_interactive(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False

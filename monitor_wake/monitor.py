"""Main monitor loop.

This module provides the WakeMonitor class that:
- Opens the bus session and registers the PrepareForSleep filter
- Drains the session one message per iteration
- Waits on the session when nothing is queued
- Prints a line through WakeNotifier when the system resumes
"""

import logging
from typing import Optional

from .bus_session import BusSession
from .config import MonitorConfig
from .models import IterationOutcome, PayloadDecodeFailure
from .notifier import WakeNotifier

logger = logging.getLogger(__name__)


class WakeMonitor:
    """Listen for PrepareForSleep and report each resume.

    The monitor has a single listening state. Every iteration takes one
    message (or waits for one), handles it completely, and discards it,
    so the process can be killed between any two iterations.

    Example:
        >>> monitor = WakeMonitor(
        ...     session=PydbusSession(),
        ...     notifier=WakeNotifier(OutputMode.PLAIN),
        ... )
        >>> monitor.run()
    """

    def __init__(
        self,
        session: BusSession,
        notifier: WakeNotifier,
        config: Optional[MonitorConfig] = None,
    ):
        """Initialize monitor.

        Args:
            session: Bus session owned by this monitor.
            notifier: Writer for wake lines.
            config: Monitor settings (defaults to logind PrepareForSleep).
        """
        self.session = session
        self.notifier = notifier
        self.config = config or MonitorConfig()
        self.subscription = self.config.subscription_filter

    def start(self) -> None:
        """Connect and subscribe.

        Raises:
            MonitorWakeError: On any connection, name or match failure.
        """
        self.session.open()

        if self.config.bus_name:
            self.session.request_name(self.config.bus_name)

        self.session.subscribe(self.subscription)
        logger.info(
            "Listening for %s.%s (mode=%s)",
            self.subscription.interface,
            self.subscription.member,
            self.notifier.mode.value,
        )

    def step(self) -> IterationOutcome:
        """Run one iteration of the listening loop.

        Returns:
            The branch taken for this iteration.
        """
        message = self.session.poll_once()

        if message is None:
            self.session.wait(self.config.idle_interval)
            return IterationOutcome.IDLE

        if not self.subscription.matches(message):
            logger.debug(
                "Ignoring %s %s.%s from %s",
                message.message_type.name,
                message.interface,
                message.member,
                message.sender,
            )
            return IterationOutcome.DISCARDED

        result = self.session.decode_bool_payload(message)

        if isinstance(result, PayloadDecodeFailure):
            logger.error(
                "Could not decode %s from %s: %s",
                self.subscription.member,
                message.sender,
                result.reason,
            )
            return IterationOutcome.DECODE_FAILED

        if result.value:
            logger.debug("System is preparing to sleep")
            return IterationOutcome.SLEEP_PENDING

        logger.debug("System resumed")
        self.notifier.emit()
        return IterationOutcome.WOKEN

    def run(self) -> None:
        """Start the session and loop forever."""
        self.start()
        while True:
            self.step()

"""System bus session management.

This module provides the BusSession interface used by the monitor loop
and PydbusSession, its implementation on top of pydbus and GDBus.

Architecture:
    - One connection per session, opened with pydbus.SystemBus()
    - The match rule is sent with a synchronous AddMatch call so that a
      rejected rule surfaces as an error at startup
    - A GDBus connection filter copies every incoming message into a
      thread-safe queue (filters run on the GDBus worker thread)
    - The loop thread drains the queue with poll_once() and blocks in
      wait() instead of sleeping blindly
"""

import logging
import queue
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Optional

from .errors import BusConnectionError, BusNameError, SubscriptionError
from .models import (
    BusMessage,
    DecodeResult,
    PayloadDecoded,
    PayloadDecodeFailure,
    SubscriptionFilter,
)

logger = logging.getLogger(__name__)


def decode_bool_payload(message: BusMessage) -> DecodeResult:
    """Read the single boolean argument of a message.

    Args:
        message: Received bus message.

    Returns:
        PayloadDecoded with the value, or PayloadDecodeFailure when the
        message has no arguments or the first one is not a boolean.
    """
    if not message.body:
        return PayloadDecodeFailure(reason="message has no arguments")

    if not message.signature.startswith("b"):
        return PayloadDecodeFailure(
            reason=f"argument is not boolean (signature '{message.signature}')"
        )

    return PayloadDecoded(value=bool(message.body[0]))


class BusSession(ABC):
    """Connection to a message bus with a single interest filter.

    Subclasses connect to a real bus and feed received messages to
    _deliver(). Queue handling is shared so that a test double only has
    to implement the connection side.
    """

    def __init__(self) -> None:
        self._inbox: "queue.SimpleQueue[BusMessage]" = queue.SimpleQueue()
        self._held: deque[BusMessage] = deque()
        self.subscription: Optional[SubscriptionFilter] = None

    @abstractmethod
    def open(self) -> None:
        """Connect to the bus.

        Raises:
            BusConnectionError: If the bus daemon is unreachable.
        """

    @abstractmethod
    def request_name(self, name: str) -> None:
        """Claim a well-known bus name, replacing an existing owner.

        Raises:
            BusNameError: If the daemon refuses the name.
        """

    @abstractmethod
    def subscribe(self, subscription: SubscriptionFilter) -> None:
        """Register the interest filter with the daemon.

        Raises:
            SubscriptionError: If the rule is rejected or cannot be flushed.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Safe to call more than once."""

    def poll_once(self) -> Optional[BusMessage]:
        """Return the next queued message without blocking.

        Returns:
            The oldest pending message, or None if nothing is queued.
        """
        if self._held:
            return self._held.popleft()
        try:
            return self._inbox.get_nowait()
        except queue.Empty:
            return None

    def wait(self, timeout: float) -> bool:
        """Block until a message is queued or the timeout expires.

        Args:
            timeout: Maximum seconds to wait.

        Returns:
            True if a message is ready for poll_once().
        """
        if self._held:
            return True
        try:
            message = self._inbox.get(timeout=timeout)
        except queue.Empty:
            return False
        self._held.append(message)
        return True

    def decode_bool_payload(self, message: BusMessage) -> DecodeResult:
        return decode_bool_payload(message)

    def _deliver(self, message: BusMessage) -> None:
        self._inbox.put(message)


class PydbusSession(BusSession):
    """BusSession on the system bus via pydbus.

    Example:
        >>> session = PydbusSession()
        >>> session.open()
        >>> session.subscribe(SubscriptionFilter(
        ...     interface="org.freedesktop.login1.Manager",
        ...     member="PrepareForSleep",
        ... ))
        >>> message = session.poll_once()
    """

    def __init__(self) -> None:
        super().__init__()
        self._bus: Any = None
        self._glib: Any = None
        self._filter_id: Optional[int] = None
        self._name_owner: Any = None

    @property
    def is_open(self) -> bool:
        return self._bus is not None

    def open(self) -> None:
        if self._bus is not None:
            raise BusConnectionError("session already open")

        try:
            from gi.repository import GLib
            from pydbus import SystemBus
        except ImportError as e:
            raise BusConnectionError(f"pydbus not available: {e}", "ImportError") from e

        self._glib = GLib
        try:
            self._bus = SystemBus()
        except GLib.Error as e:
            raise BusConnectionError(e.message, e.domain) from e

        logger.info("Connected to system bus")

    def request_name(self, name: str) -> None:
        self._require_open()
        try:
            self._name_owner = self._bus.request_name(
                name, allow_replacement=False, replace=True
            )
        except self._glib.Error as e:
            raise BusNameError(e.message, e.domain) from e
        except RuntimeError as e:
            raise BusNameError(str(e), name) from e

        logger.info("Acquired bus name %s", name)

    def subscribe(self, subscription: SubscriptionFilter) -> None:
        self._require_open()
        if self.subscription is not None:
            raise SubscriptionError(
                f"already subscribed with {self.subscription.rule}"
            )

        con = self._bus.con
        self._filter_id = con.add_filter(self._on_message)

        try:
            self._bus.dbus.AddMatch(subscription.rule)
            con.flush_sync(None)
        except self._glib.Error as e:
            con.remove_filter(self._filter_id)
            self._filter_id = None
            raise SubscriptionError(e.message, e.domain) from e

        self.subscription = subscription
        logger.info("Subscribed with match rule %s", subscription.rule)

    def close(self) -> None:
        if self._bus is None:
            return

        if self._filter_id is not None:
            self._bus.con.remove_filter(self._filter_id)
            self._filter_id = None
        if self._name_owner is not None:
            self._name_owner.unown()
            self._name_owner = None

        self._bus = None
        self.subscription = None
        self._held.clear()
        logger.debug("Bus session closed")

    def _require_open(self) -> None:
        if self._bus is None:
            raise BusConnectionError("session is not open")

    def _on_message(self, connection: Any, message: Any, incoming: bool) -> Any:
        """GDBus filter callback, runs on the GDBus worker thread."""
        if incoming:
            try:
                self._deliver(BusMessage.from_gio(message))
            except Exception as e:
                # Returning None here would drop the message for the whole connection
                logger.debug("Dropping unreadable message: %s", e)
        return message

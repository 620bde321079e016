"""Fake bus session and message builders for testing without a bus daemon.

These fixtures simulate the messages a real system bus delivers while
the monitor is subscribed to logind's PrepareForSleep signal.
"""

from typing import Any, Optional

from monitor_wake.bus_session import BusSession
from monitor_wake.models import BusMessage, MessageType, SubscriptionFilter

LOGIND_INTERFACE = "org.freedesktop.login1.Manager"
LOGIND_PATH = "/org/freedesktop/login1"
LOGIND_SENDER = ":1.3"


def make_sleep_signal(
    value: Any = True,
    signature: str = "b",
    interface: str = LOGIND_INTERFACE,
    member: str = "PrepareForSleep",
) -> BusMessage:
    """Create a PrepareForSleep signal.

    Args:
        value: First body argument.
        signature: Body signature.
        interface: Interface name.
        member: Signal name.

    Returns:
        BusMessage as the session would queue it.
    """
    return BusMessage(
        message_type=MessageType.SIGNAL,
        sender=LOGIND_SENDER,
        path=LOGIND_PATH,
        interface=interface,
        member=member,
        signature=signature,
        body=(value,),
    )


def make_resume_signal() -> BusMessage:
    return make_sleep_signal(False)


def make_empty_signal() -> BusMessage:
    """PrepareForSleep without arguments."""
    return BusMessage(
        message_type=MessageType.SIGNAL,
        sender=LOGIND_SENDER,
        path=LOGIND_PATH,
        interface=LOGIND_INTERFACE,
        member="PrepareForSleep",
    )


def make_name_acquired() -> BusMessage:
    """Unicast signal the daemon sends after RequestName."""
    return BusMessage(
        message_type=MessageType.SIGNAL,
        sender="org.freedesktop.DBus",
        path="/org/freedesktop/DBus",
        interface="org.freedesktop.DBus",
        member="NameAcquired",
        signature="s",
        body=("user.MonitorWake",),
    )


class FakeBusSession(BusSession):
    """In-memory BusSession.

    Messages passed to inject() are queued exactly as the GDBus filter
    queues them in PydbusSession.

    Args:
        open_error: Exception raised by open().
        name_error: Exception raised by request_name().
        subscribe_error: Exception raised by subscribe().
        interrupt_when_idle: Raise KeyboardInterrupt from wait() once the
            queue is drained, ending main() after scripted traffic.
    """

    def __init__(
        self,
        open_error: Optional[Exception] = None,
        name_error: Optional[Exception] = None,
        subscribe_error: Optional[Exception] = None,
        interrupt_when_idle: bool = False,
    ):
        super().__init__()
        self.open_error = open_error
        self.name_error = name_error
        self.subscribe_error = subscribe_error
        self.interrupt_when_idle = interrupt_when_idle

        self.opened = False
        self.closed = False
        self.requested_names: list[str] = []
        self.decoded: list[BusMessage] = []
        self.wait_calls: list[float] = []

    def open(self) -> None:
        if self.open_error is not None:
            raise self.open_error
        self.opened = True

    def request_name(self, name: str) -> None:
        if self.name_error is not None:
            raise self.name_error
        self.requested_names.append(name)

    def subscribe(self, subscription: SubscriptionFilter) -> None:
        if self.subscribe_error is not None:
            raise self.subscribe_error
        self.subscription = subscription

    def close(self) -> None:
        self.closed = True

    def wait(self, timeout: float) -> bool:
        self.wait_calls.append(timeout)
        if self.interrupt_when_idle and self._inbox.empty() and not self._held:
            raise KeyboardInterrupt
        return super().wait(timeout)

    def decode_bool_payload(self, message: BusMessage):
        self.decoded.append(message)
        return super().decode_bool_payload(message)

    def inject(self, *messages: BusMessage) -> None:
        for message in messages:
            self._deliver(message)

"""Pydantic data models for the wake monitor.

This module defines the data structures passed between the bus session
and the monitor loop:
- MessageType: D-Bus message kinds (mirrors Gio.DBusMessageType)
- BusMessage: Immutable snapshot of one received bus message
- SubscriptionFilter: Match rule for the signal of interest
- PayloadDecoded / PayloadDecodeFailure: Tagged result of payload decoding
- OutputMode: How wake lines are rendered
- IterationOutcome: Which branch one loop iteration took
"""

from enum import Enum, IntEnum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================


class MessageType(IntEnum):
    """D-Bus message types, numbered as on the wire."""

    INVALID = 0
    METHOD_CALL = 1
    METHOD_RETURN = 2
    ERROR = 3
    SIGNAL = 4


class OutputMode(str, Enum):
    """Output format selected once at startup."""

    PLAIN = "plain"
    UNIX_TIMESTAMP = "unix-timestamp"
    HUMAN_TIMESTAMP = "human-timestamp"


class IterationOutcome(str, Enum):
    """Result of a single monitor loop iteration.

    Transitions (all return to listening):
        IDLE: No message queued, waited for the idle interval
        DISCARDED: Message for another interface/member
        DECODE_FAILED: Matching message with unusable payload
        SLEEP_PENDING: PrepareForSleep(true), nothing printed
        WOKEN: PrepareForSleep(false), one line printed
    """

    IDLE = "idle"
    DISCARDED = "discarded"
    DECODE_FAILED = "decode_failed"
    SLEEP_PENDING = "sleep_pending"
    WOKEN = "woken"


# =============================================================================
# Bus Message
# =============================================================================


class BusMessage(BaseModel):
    """Snapshot of a message received on the bus.

    Attributes:
        message_type: Kind of message (signal, method call, ...).
        sender: Unique name of the sender, if known.
        path: Object path the message refers to.
        interface: Interface name (signals and method calls).
        member: Signal or method name.
        signature: D-Bus type signature of the body (e.g. "b").
        body: Unpacked body arguments.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    message_type: MessageType = Field(..., description="D-Bus message type")
    sender: Optional[str] = Field(default=None, description="Sender bus name")
    path: Optional[str] = Field(default=None, description="Object path")
    interface: Optional[str] = Field(default=None, description="Interface name")
    member: Optional[str] = Field(default=None, description="Member name")
    signature: str = Field(default="", description="Body type signature")
    body: tuple[Any, ...] = Field(default=(), description="Unpacked body arguments")

    @classmethod
    def from_gio(cls, message: Any) -> "BusMessage":
        """Build a snapshot from a Gio.DBusMessage."""
        body = message.get_body()
        return cls(
            message_type=MessageType(int(message.get_message_type())),
            sender=message.get_sender(),
            path=message.get_path(),
            interface=message.get_interface(),
            member=message.get_member(),
            signature=message.get_signature() or "",
            body=tuple(body.unpack()) if body is not None else (),
        )


# =============================================================================
# Subscription Filter
# =============================================================================


class SubscriptionFilter(BaseModel):
    """Immutable interest filter registered once per session."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    interface: str = Field(..., min_length=1, description="Signal interface")
    member: str = Field(..., min_length=1, description="Signal member")
    message_type: MessageType = Field(default=MessageType.SIGNAL)

    @property
    def rule(self) -> str:
        """D-Bus match rule string for AddMatch."""
        return (
            f"type='{self.message_type.name.lower()}',"
            f"interface='{self.interface}',"
            f"member='{self.member}'"
        )

    def matches(self, message: BusMessage) -> bool:
        """Check whether a received message is the subscribed signal."""
        return (
            message.message_type == self.message_type
            and message.interface == self.interface
            and message.member == self.member
        )


# =============================================================================
# Decode Result
# =============================================================================


class PayloadDecoded(BaseModel):
    """Boolean payload read successfully."""

    model_config = ConfigDict(frozen=True)

    value: bool


class PayloadDecodeFailure(BaseModel):
    """Payload missing or not boolean."""

    model_config = ConfigDict(frozen=True)

    reason: str


DecodeResult = Union[PayloadDecoded, PayloadDecodeFailure]

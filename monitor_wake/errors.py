"""Fatal startup errors for the wake monitor.

Every error here means the environment is misconfigured (no bus daemon,
missing permissions, rejected match rule). They are raised by the bus
session, caught once by the CLI, and end the process with exit code 1.
"""

from typing import Optional


class MonitorWakeError(Exception):
    """Base exception for fatal monitor errors."""

    label = "Error"

    def __init__(self, message: str, category: Optional[str] = None):
        """
        Initialize error.

        Args:
            message: Human-readable error message
            category: Error category reported by the bus (GLib error
                domain or D-Bus error name), if any
        """
        self.message = message
        self.category = category
        super().__init__(message)

    def __str__(self) -> str:
        if self.category:
            return f"{self.label} ({self.category}: {self.message})"
        return f"{self.label} ({self.message})"


class BusConnectionError(MonitorWakeError):
    """System bus could not be reached."""

    label = "Connection Error"


class BusNameError(MonitorWakeError):
    """Well-known bus name could not be acquired."""

    label = "Name Error"


class SubscriptionError(MonitorWakeError):
    """Match rule was rejected or could not be flushed to the daemon."""

    label = "Match Error"

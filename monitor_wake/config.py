"""Configuration dataclass for the wake monitor."""

from dataclasses import dataclass
from typing import Optional

from .models import OutputMode, SubscriptionFilter

LOGIND_MANAGER_INTERFACE = "org.freedesktop.login1.Manager"
PREPARE_FOR_SLEEP = "PrepareForSleep"


@dataclass
class MonitorConfig:
    """Monitor settings.

    Built by the CLI from the parsed arguments; there are no config
    files or environment overrides.

    bus_name is only reachable from Python code: the CLI accepts a
    single argument and always leaves it unset. Owning a name such as
    "user.MonitorWake" on the system bus needs a policy file in
    /usr/share/dbus-1/system.d/ granting the user "own" permission.
    """

    mode: OutputMode = OutputMode.PLAIN
    interface: str = LOGIND_MANAGER_INTERFACE
    member: str = PREPARE_FOR_SLEEP
    idle_interval: float = 1.0  # Seconds
    bus_name: Optional[str] = None
    log_level: str = "INFO"

    @property
    def subscription_filter(self) -> SubscriptionFilter:
        return SubscriptionFilter(interface=self.interface, member=self.member)

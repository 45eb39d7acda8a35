"""Command models parsed from inbound messages"""

from dataclasses import dataclass
from typing import Tuple, Union

from .device import Device, ScheduleKind


@dataclass(frozen=True)
class Greeting:
    """Literal greeting token"""


@dataclass(frozen=True)
class MenuRequest:
    """menu / help / start"""


@dataclass(frozen=True)
class SensorQuery:
    """Request for the latest sensor readout"""


@dataclass(frozen=True)
class ScheduleDefinition:
    """Full replacement of one schedule record"""
    kind: ScheduleKind
    times: Tuple[str, ...]
    duration: int  # minutes

    def to_record(self):
        """Store representation; a definition always enables the schedule"""
        return {"enabled": True, "times": list(self.times), "duration": self.duration}


@dataclass(frozen=True)
class DeviceToggle:
    device: Device
    on: bool


@dataclass(frozen=True)
class AutoModeToggle:
    device: Device
    on: bool


@dataclass(frozen=True)
class Unrecognized:
    """Text that matched no command.

    ``format_error`` marks a ``jadwal`` message with bad arguments, which gets a
    usage hint instead of a fallback completion.
    """
    raw_text: str
    format_error: bool = False


Command = Union[
    Greeting,
    MenuRequest,
    SensorQuery,
    ScheduleDefinition,
    DeviceToggle,
    AutoModeToggle,
    Unrecognized,
]

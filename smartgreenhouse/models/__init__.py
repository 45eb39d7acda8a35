"""Models package"""

from .device import Device, ScheduleKind
from .command import (
    AutoModeToggle,
    Command,
    DeviceToggle,
    Greeting,
    MenuRequest,
    ScheduleDefinition,
    SensorQuery,
    Unrecognized,
)
from .schedule import Schedule, SensorSnapshot, is_valid_time

__all__ = [
    'Device',
    'ScheduleKind',
    'Command',
    'Greeting',
    'MenuRequest',
    'SensorQuery',
    'ScheduleDefinition',
    'DeviceToggle',
    'AutoModeToggle',
    'Unrecognized',
    'Schedule',
    'SensorSnapshot',
    'is_valid_time',
]

"""Command parser - turns inbound WhatsApp text into a Command.

Matching is exact-literal after trimming and lower-casing. Nothing is inferred
from partial matches, so a typo can never actuate a device; it falls through to
the conversational fallback instead.
"""

import logging
import re
from typing import Optional

from .. import config
from ..models import (
    AutoModeToggle,
    Command,
    Device,
    DeviceToggle,
    Greeting,
    MenuRequest,
    ScheduleDefinition,
    ScheduleKind,
    SensorQuery,
    Unrecognized,
    is_valid_time,
)

logger = logging.getLogger(__name__)

GREETINGS = frozenset([
    "hi",
    "halo",
    "hallo",
    "assalamualaikum",
    "selamat pagi",
    "selamat siang",
    "selamat sore",
    "selamat malam",
])

SCHEDULE_KEYWORD = "jadwal"
DURATION_KEYWORD = "durasi"

COMMAND_TABLE = {
    "menu": MenuRequest(),
    "help": MenuRequest(),
    "start": MenuRequest(),
    "sensor": SensorQuery(),
    "auto cooler on": AutoModeToggle(Device.COOLER, True),
    "auto cooler off": AutoModeToggle(Device.COOLER, False),
}
for _device in Device:
    COMMAND_TABLE[f"{_device.value} on"] = DeviceToggle(_device, True)
    COMMAND_TABLE[f"{_device.value} off"] = DeviceToggle(_device, False)

_WHITESPACE = re.compile(r"\s+")


def parse_command(text: str) -> Command:
    """Parse one inbound message into exactly one Command"""
    raw = (text or "").strip()
    normalized = raw.lower()
    
    if normalized in GREETINGS:
        return Greeting()
    
    tokens = _WHITESPACE.split(raw) if raw else []
    if tokens and tokens[0].lower() == SCHEDULE_KEYWORD:
        return _parse_schedule(raw, tokens)
    
    command = COMMAND_TABLE.get(normalized)
    if command is not None:
        return command
    
    return Unrecognized(raw_text=raw)


def _parse_schedule(raw: str, tokens) -> Command:
    """jadwal <air|pupuk> <HH:MM> [<HH:MM> ...] [durasi <minutes>]"""
    kind = ScheduleKind.from_token(tokens[1]) if len(tokens) > 1 else None
    times = tuple(dict.fromkeys(t for t in tokens[2:] if is_valid_time(t)))
    duration = _parse_duration(tokens)
    
    if kind is None or not times or duration is None:
        logger.info(f"Rejected schedule definition: {raw!r}")
        return Unrecognized(raw_text=raw, format_error=True)
    
    return ScheduleDefinition(kind=kind, times=times, duration=duration)


def _parse_duration(tokens) -> Optional[int]:
    lowered = [t.lower() for t in tokens]
    if DURATION_KEYWORD not in lowered:
        return config.DEFAULT_SCHEDULE_DURATION
    index = lowered.index(DURATION_KEYWORD)
    if index + 1 >= len(tokens):
        return config.DEFAULT_SCHEDULE_DURATION
    try:
        duration = int(tokens[index + 1])
    except ValueError:
        return None
    return duration if duration > 0 else None

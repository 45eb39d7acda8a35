"""Reply composer - fixed Indonesian message catalog keyed by outcome.

Pure formatting: no I/O, no failure modes for known command variants.
"""

from dataclasses import dataclass
from enum import Enum
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
    SensorQuery,
    SensorSnapshot,
    Unrecognized,
)

GREETING_TEXT = (
    "👋 Halo! Saya asisten Smart Greenhouse.\n"
    "Ketik *menu* untuk melihat perintah yang tersedia."
)

MENU_TEXT = (
    "📋 Menu Smart Greenhouse:\n\n"
    "• water on/off – Pompa air 💧\n"
    "• fertilizer on/off – Pompa pupuk 🌿\n"
    "• cooler on/off – Pendingin ❄\n"
    "• auto cooler on/off – Mode otomatis pendingin 🧠\n"
    "• sensor – Lihat data sensor 🌡\n"
    "• jadwal air/pupuk [waktu...] durasi [menit] – Atur jadwal otomatis"
)

DEVICE_ON_TEXT = {
    Device.WATER: "💧 Pompa air dinyalakan!",
    Device.FERTILIZER: "🌿 Pompa pupuk dinyalakan!",
    Device.COOLER: "❄ Pendingin dinyalakan!",
}

DEVICE_OFF_TEXT = {
    Device.WATER: "⚫ Pompa air dimatikan!",
    Device.FERTILIZER: "⚫ Pompa pupuk dimatikan!",
    Device.COOLER: "⚫ Pendingin dimatikan!",
}

AUTO_MODE_ON_TEXT = (
    "🧠 Mode otomatis pendingin diaktifkan. "
    "Pendingin akan menyala saat suhu > {threshold}°C."
)
AUTO_MODE_OFF_TEXT = (
    "🛑 Mode otomatis pendingin dinonaktifkan. "
    "Sekarang kamu bisa mengontrol manual."
)

SCHEDULE_SAVED_TEXT = (
    "✅ Jadwal {label} disimpan:\n"
    "Waktu: {times}\n"
    "Durasi: {duration} menit"
)
SCHEDULE_FORMAT_ERROR_TEXT = "❌ Format salah. Contoh: jadwal air 06:00 18:00 durasi 5"

SENSOR_TEXT = (
    "🌡 Suhu: {temperature} °C\n"
    "💧 Kelembapan Udara: {humidity} %\n"
    "🌱 Kelembapan Tanah: {soil_moisture} %"
)
SENSOR_UNAVAILABLE_TEXT = "⚠ Data sensor belum tersedia."
SENSOR_PLACEHOLDER = "-"

FALLBACK_APOLOGY_TEXT = "Maaf, saya tidak dapat memproses pesan Anda."
FALLBACK_QUOTA_TEXT = "💸 Maaf, sistem sedang kehabisan kredit. Coba lagi nanti atau hubungi admin."
FALLBACK_ERROR_TEXT = "⚠ Terjadi kesalahan saat memproses pesan Anda."


class FallbackFailure(str, Enum):
    QUOTA = "quota"
    ERROR = "error"


@dataclass(frozen=True)
class FallbackOutcome:
    """Result of delegating an unrecognized message to the fallback service"""
    text: Optional[str] = None
    failure: Optional[FallbackFailure] = None


class ReplyComposer:
    """Map a (Command, outcome) pair to the user-facing reply"""
    
    def __init__(self, cooler_threshold: int = None):
        self.cooler_threshold = cooler_threshold or config.COOLER_AUTO_THRESHOLD_C
    
    def compose(self, command: Command, outcome=None) -> str:
        """Outcome is a SensorSnapshot (or None) for SensorQuery and a
        FallbackOutcome for a generic Unrecognized; other commands ignore it."""
        if isinstance(command, Greeting):
            return GREETING_TEXT
        if isinstance(command, MenuRequest):
            return MENU_TEXT
        if isinstance(command, DeviceToggle):
            return (DEVICE_ON_TEXT if command.on else DEVICE_OFF_TEXT)[command.device]
        if isinstance(command, AutoModeToggle):
            if command.on:
                return AUTO_MODE_ON_TEXT.format(threshold=self.cooler_threshold)
            return AUTO_MODE_OFF_TEXT
        if isinstance(command, ScheduleDefinition):
            return SCHEDULE_SAVED_TEXT.format(
                label=command.kind.label,
                times=", ".join(command.times),
                duration=command.duration,
            )
        if isinstance(command, SensorQuery):
            return self.sensor_readout(outcome)
        if isinstance(command, Unrecognized):
            if command.format_error:
                return SCHEDULE_FORMAT_ERROR_TEXT
            return self.fallback_reply(outcome or FallbackOutcome())
        raise TypeError(f"Unhandled command type: {type(command).__name__}")
    
    def sensor_readout(self, snapshot: Optional[SensorSnapshot]) -> str:
        if snapshot is None:
            return SENSOR_UNAVAILABLE_TEXT
        return SENSOR_TEXT.format(
            temperature=_one_decimal(snapshot.temperature),
            humidity=_one_decimal(snapshot.humidity),
            soil_moisture=_one_decimal(snapshot.soil_moisture),
        )
    
    def fallback_reply(self, outcome: FallbackOutcome) -> str:
        if outcome.failure == FallbackFailure.QUOTA:
            return FALLBACK_QUOTA_TEXT
        if outcome.failure == FallbackFailure.ERROR:
            return FALLBACK_ERROR_TEXT
        text = (outcome.text or "").strip()
        return text or FALLBACK_APOLOGY_TEXT


def _one_decimal(value: Optional[float]) -> str:
    return SENSOR_PLACEHOLDER if value is None else f"{value:.1f}"

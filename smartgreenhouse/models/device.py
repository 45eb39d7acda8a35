"""Device and schedule kind enumerations"""

from enum import Enum


class Device(str, Enum):
    WATER = "water"
    FERTILIZER = "fertilizer"
    COOLER = "cooler"


class ScheduleKind(str, Enum):
    WATERING = "watering"
    FERTILIZING = "fertilizing"

    @classmethod
    def from_token(cls, token: str):
        """Map the user-facing token (``air``/``pupuk``) to a kind, or None"""
        return _KIND_TOKENS.get(token.lower())

    @property
    def token(self) -> str:
        return _TOKENS_BY_KIND[self]

    @property
    def device(self) -> Device:
        """Device actuated when a schedule of this kind fires"""
        return _KIND_DEVICES[self]

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


_KIND_TOKENS = {
    "air": ScheduleKind.WATERING,
    "pupuk": ScheduleKind.FERTILIZING,
}

_TOKENS_BY_KIND = {kind: token for token, kind in _KIND_TOKENS.items()}

_KIND_DEVICES = {
    ScheduleKind.WATERING: Device.WATER,
    ScheduleKind.FERTILIZING: Device.FERTILIZER,
}

_KIND_LABELS = {
    ScheduleKind.WATERING: "penyiraman",
    ScheduleKind.FERTILIZING: "pemupukan",
}

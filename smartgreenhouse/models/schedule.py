"""Schedule and sensor records as stored in the Realtime Database"""

import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .. import config

TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")


def is_valid_time(value: str) -> bool:
    """True for a zero-padded 24-hour HH:MM string"""
    if not TIME_PATTERN.match(value):
        return False
    hours, minutes = value.split(":")
    return int(hours) < 24 and int(minutes) < 60


class Schedule(BaseModel):
    """Daily trigger times plus actuation duration for one schedule kind"""
    enabled: bool = False
    times: List[str] = Field(default_factory=list)
    duration: int = Field(default=config.DEFAULT_SCHEDULE_DURATION, gt=0)  # minutes

    @field_validator("times", mode="before")
    @classmethod
    def _collapse_times(cls, value):
        if value is None:
            return []
        # Realtime Database returns sparse arrays as dicts
        if isinstance(value, dict):
            value = list(value.values())
        return list(dict.fromkeys(value))

    @field_validator("times")
    @classmethod
    def _check_times(cls, value):
        for entry in value:
            if not is_valid_time(entry):
                raise ValueError(f"invalid schedule time: {entry!r}")
        return value

    @field_validator("duration", mode="before")
    @classmethod
    def _default_duration(cls, value):
        # A stored 0 or null falls back to the default
        if not value:
            return config.DEFAULT_SCHEDULE_DURATION
        return value

    def fires_at(self, current_time: str) -> bool:
        return self.enabled and current_time in self.times


class SensorSnapshot(BaseModel):
    """Latest readings published by the sensor pipeline"""
    model_config = ConfigDict(populate_by_name=True)

    temperature: Optional[float] = None  # Celsius
    humidity: Optional[float] = None  # Percentage
    soil_moisture: Optional[float] = Field(default=None, alias="soilMoisture")  # Percentage

    @field_validator("temperature", "humidity", "soil_moisture", mode="before")
    @classmethod
    def _drop_non_numeric(cls, value):
        if isinstance(value, bool):
            return None
        try:
            return float(value) if value is not None else None
        except (TypeError, ValueError):
            return None

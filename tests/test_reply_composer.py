"""Tests for the reply composer."""

from __future__ import annotations

import pytest

from smartgreenhouse.models import (
    AutoModeToggle,
    Device,
    DeviceToggle,
    Greeting,
    MenuRequest,
    ScheduleDefinition,
    ScheduleKind,
    SensorQuery,
    SensorSnapshot,
    Unrecognized,
)
from smartgreenhouse.services.reply_composer import (
    AUTO_MODE_OFF_TEXT,
    FALLBACK_APOLOGY_TEXT,
    FALLBACK_ERROR_TEXT,
    FALLBACK_QUOTA_TEXT,
    GREETING_TEXT,
    MENU_TEXT,
    SCHEDULE_FORMAT_ERROR_TEXT,
    SENSOR_UNAVAILABLE_TEXT,
    FallbackFailure,
    FallbackOutcome,
    ReplyComposer,
)


@pytest.fixture
def composer():
    return ReplyComposer(cooler_threshold=34)


def test_static_texts(composer):
    assert composer.compose(Greeting()) == GREETING_TEXT
    assert composer.compose(MenuRequest()) == MENU_TEXT
    assert "jadwal air/pupuk" in MENU_TEXT


@pytest.mark.parametrize("device", list(Device))
def test_every_device_has_on_and_off_text(composer, device):
    on_text = composer.compose(DeviceToggle(device, True))
    off_text = composer.compose(DeviceToggle(device, False))
    assert "dinyalakan" in on_text
    assert "dimatikan" in off_text


def test_auto_mode_texts():
    composer = ReplyComposer(cooler_threshold=30)
    assert "> 30°C" in composer.compose(AutoModeToggle(Device.COOLER, True))
    assert composer.compose(AutoModeToggle(Device.COOLER, False)) == AUTO_MODE_OFF_TEXT


def test_schedule_saved(composer):
    reply = composer.compose(ScheduleDefinition(ScheduleKind.FERTILIZING, ("07:00", "17:00"), 3))
    assert reply == "✅ Jadwal pemupukan disimpan:\nWaktu: 07:00, 17:00\nDurasi: 3 menit"


def test_schedule_format_error(composer):
    assert composer.compose(Unrecognized("jadwal x", format_error=True)) == SCHEDULE_FORMAT_ERROR_TEXT


class TestSensor:
    def test_unavailable(self, composer):
        assert composer.compose(SensorQuery(), None) == SENSOR_UNAVAILABLE_TEXT

    def test_readout(self, composer):
        snapshot = SensorSnapshot(temperature=25.0, humidity=60.0, soil_moisture=40.0)
        assert composer.compose(SensorQuery(), snapshot) == (
            "🌡 Suhu: 25.0 °C\n💧 Kelembapan Udara: 60.0 %\n🌱 Kelembapan Tanah: 40.0 %"
        )

    def test_all_fields_missing(self, composer):
        reply = composer.compose(SensorQuery(), SensorSnapshot())
        assert reply.count("- ") == 3


class TestFallback:
    def test_text(self, composer):
        assert composer.compose(Unrecognized("x"), FallbackOutcome(text=" ok ")) == "ok"

    def test_missing_outcome_gets_apology(self, composer):
        assert composer.compose(Unrecognized("x")) == FALLBACK_APOLOGY_TEXT

    def test_quota(self, composer):
        outcome = FallbackOutcome(failure=FallbackFailure.QUOTA)
        assert composer.compose(Unrecognized("x"), outcome) == FALLBACK_QUOTA_TEXT

    def test_error(self, composer):
        outcome = FallbackOutcome(failure=FallbackFailure.ERROR)
        assert composer.compose(Unrecognized("x"), outcome) == FALLBACK_ERROR_TEXT


def test_unknown_variant_raises(composer):
    with pytest.raises(TypeError):
        composer.compose("water on")

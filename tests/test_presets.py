"""Tests for presets.py — example presets and display configuration."""

import os
import sys
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from name_analyzer import Label
from presets import (
    EXAMPLE_PRESETS, ExamplePreset, ValidatorConfig, get_preset, validate_speed,
    DEFAULT_SPEED_MS, MIN_SPEED_MS, MAX_SPEED_MS,
)


class TestPresets:
    def test_six_presets(self):
        assert [p.name for p in EXAMPLE_PRESETS] == [
            "myVariable", "_counter", "x123", "123abc", "my-var", "$price"]

    @pytest.mark.parametrize("preset", EXAMPLE_PRESETS, ids=lambda p: p.name)
    def test_expectation_holds(self, preset):
        assert preset.matches_expectation()

    def test_rerunnable(self):
        p = get_preset("my-var")
        assert p.run() == p.run()

    def test_recommend_only_when_accepted(self):
        assert get_preset("123abc").recommend() is None
        rec = get_preset("_counter").recommend()
        assert rec.label is Label.GOOD

    def test_get_unknown(self):
        with pytest.raises(KeyError):
            get_preset("nope")

    def test_to_dict(self):
        d = ExamplePreset("a", "b", True).to_dict()
        assert d == {"name": "a", "description": "b", "expected_valid": True}


class TestConfig:
    def test_defaults(self):
        cfg = ValidatorConfig()
        assert cfg.speed_ms == DEFAULT_SPEED_MS
        assert cfg.interval_seconds == pytest.approx(0.5)
        assert cfg.presets == EXAMPLE_PRESETS

    @pytest.mark.parametrize("speed", [MIN_SPEED_MS, 250, MAX_SPEED_MS])
    def test_speed_in_range(self, speed):
        assert ValidatorConfig(speed_ms=speed).speed_ms == speed

    @pytest.mark.parametrize("speed", [0, 99, 1001, -5])
    def test_speed_out_of_range(self, speed):
        with pytest.raises(ValueError):
            ValidatorConfig(speed_ms=speed)

    def test_speed_not_a_number(self):
        with pytest.raises(ValueError):
            validate_speed("fast")
        with pytest.raises(ValueError):
            validate_speed(None)

    def test_speed_coerced(self):
        assert validate_speed("300") == 300

    def test_from_dict(self):
        cfg = ValidatorConfig.from_dict({"speed_ms": 200, "log_dir": "out"})
        assert cfg.speed_ms == 200
        assert cfg.log_dir == "out"

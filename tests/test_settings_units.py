import json

import pytest

from engine import DEFAULT_REST_DURATION
from engine.settings import Settings
from engine.units import (
    format_weight,
    format_weight_for_load,
    from_display_weight,
    kg_to_lbs,
    lbs_to_kg,
    round_input_to_half,
    to_display_weight,
)


def test_settings_created_with_defaults(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    settings = Settings(path)
    assert settings.use_kg is False
    assert settings.rest_duration == DEFAULT_REST_DURATION
    assert path.exists()
    keys = [item["key"] for item in json.loads(path.read_text())]
    assert keys == ["use_kg", "rest_timer_default_seconds", "exercise_timer_default_seconds"]


def test_settings_persist_changes(tmp_path):
    path = tmp_path / "settings.json"
    Settings(path).set_value("use_kg", True)
    Settings(path).set_value("sound_on", False)
    reloaded = Settings(path)
    assert reloaded.use_kg is True
    assert reloaded.get_value("sound_on") is False
    assert reloaded.get_value("unknown", 7) == 7


def test_corrupt_settings_fall_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{oops")
    settings = Settings(path)
    assert settings.exercise_duration == 30
    assert isinstance(json.loads(path.read_text()), list)


def test_missing_key_uses_default(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps([{"key": "use_kg", "value": True, "type": "bool"}]))
    settings = Settings(path)
    assert settings.use_kg is True
    assert settings.rest_duration == DEFAULT_REST_DURATION


@pytest.mark.parametrize(
    "lbs,expected",
    [
        (0, "0"),
        (135, "135"),
        (87.5, "87.5"),
        (2.3, "2.5"),
        (2.2, "2"),
        (2.7, "2.5"),
        (2.8, "3"),
        (10.3, "10.5"),
        (99.9, "100"),
    ],
)
def test_format_weight_for_load_in_lbs(lbs, expected):
    assert format_weight_for_load(lbs, False) == expected


def test_format_weight_for_load_in_kg():
    assert format_weight_for_load(kg_to_lbs(20), True) == "20"
    assert format_weight_for_load(kg_to_lbs(2.5), True) == "2.5"
    assert format_weight_for_load(100, True) == "45.5"


def test_format_weight_rounds_to_one_decimal():
    assert format_weight(100, True) == "45.4"
    assert format_weight(135, False) == "135"
    assert format_weight(12.25, False) == "12.3"


def test_display_conversion_round_trip():
    assert to_display_weight(100, False) == 100
    assert from_display_weight(45, False) == 45
    assert from_display_weight(to_display_weight(100, True), True) == pytest.approx(100)
    assert lbs_to_kg(kg_to_lbs(60)) == pytest.approx(60)


def test_round_input_to_half():
    assert round_input_to_half(87.3) == 87.5
    assert round_input_to_half(87.2) == 87.0
    assert round_input_to_half(0.25) == 0.5

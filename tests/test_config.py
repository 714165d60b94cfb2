import json

import pytest

from panchangam.config import Settings, load_settings, parse_offset
from panchangam.core import TimeConverter


def test_defaults():
    s = Settings()
    assert s.timezone.source_offset == -480
    assert s.timezone.target_offset == 330
    assert s.layout.sections["tithi"] == "Thithi details"
    assert s.layout.headers == ["Samvatsaram", "Ayanam", "Ruthu", "Masam", "Paksham"]


@pytest.mark.parametrize(
    "raw, minutes",
    [("+05:30", 330), ("-08:00", -480), ("UTC-8", -480), ("-0700", -420), ("330", 330), (60, 60)],
)
def test_parse_offset(raw, minutes):
    assert parse_offset(raw) == minutes


def test_parse_offset_rejects_garbage():
    with pytest.raises(ValueError):
        parse_offset("somewhere east")


def test_from_env(monkeypatch):
    monkeypatch.setenv("PANCHANGAM_TIMEZONE__TARGET_OFFSET", "+05:45")
    monkeypatch.setenv("PANCHANGAM_SOURCE__LOCATION", "https://example.org/p.txt")
    s = Settings()
    assert s.timezone.target_offset == 345
    assert s.source.location == "https://example.org/p.txt"
    assert TimeConverter.from_settings(s).target_offset == 345


def test_load_settings_json(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"timezone": {"source_offset": "-07:00"}, "display": {"placeholder": "-"}}))
    s = load_settings(p)
    assert s.timezone.source_offset == -420
    assert s.display.placeholder == "-"


def test_load_settings_rejects_non_mapping(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text("[1, 2]")
    with pytest.raises(TypeError):
        load_settings(p)


def test_load_settings_yaml(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("layout:\n  headers: Masam, Paksham\nlogging:\n  level: DEBUG\n")
    s = load_settings(p)
    assert s.layout.headers == ["Masam", "Paksham"]
    assert s.logging.level == "DEBUG"

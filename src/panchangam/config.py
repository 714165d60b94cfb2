"""Configuration utilities for panchangam.

This module defines a hierarchical configuration schema using Pydantic models.
The :class:`Settings` container groups the timezone offsets, the data source
location, the labels that make up the almanac layout, display conventions and
logging.  Instances can be populated from environment variables or from
YAML/JSON files with matching nested keys.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import EnvSettingsSource


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

# +H:MM, +HH:MM or +HHMM; a bare "-480" is minutes.
_OFFSET_RE = re.compile(r"(?P<sign>[+-])(?:(?P<h>\d{1,2}):|(?P<hh>\d{2}))(?P<mm>[0-5]\d)")
_UTC_HOURS_RE = re.compile(r"([+-])(\d{1,2})")


def _split_strings(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_offset(value: Any) -> int:
    """Return a UTC offset in minutes.

    Integers are taken as minutes already; strings may be written as
    ``"+05:30"``, ``"-0800"``, ``"UTC-8"`` or a plain integer.
    """

    if isinstance(value, bool):
        raise ValueError(f"invalid UTC offset: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    text = str(value).strip()
    if text[:3].upper() == "UTC":
        text = text[3:].strip()
        m = _UTC_HOURS_RE.fullmatch(text)
        if m:
            return (-1 if m.group(1) == "-" else 1) * int(m.group(2)) * 60
    m = _OFFSET_RE.fullmatch(text)
    if m:
        sign = -1 if m.group("sign") == "-" else 1
        hours = int(m.group("h") or m.group("hh"))
        return sign * (hours * 60 + int(m.group("mm")))
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"invalid UTC offset: {value!r}") from None


class SectionModel(BaseModel):
    """Base model for configuration subsections that ignores unknown fields."""

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Settings schema
# ---------------------------------------------------------------------------


class TimezoneSettings(SectionModel):
    """Fixed UTC offsets, in minutes, of the file and of the observer."""

    source_offset: int = -8 * 60
    target_offset: int = 5 * 60 + 30
    source_label: str = "PST"
    target_label: str = "IST"

    @field_validator("source_offset", "target_offset", mode="before")
    @classmethod
    def _coerce_offset(cls, value: Any) -> Any:
        return parse_offset(value)


class SourceSettings(SectionModel):
    """Where the almanac text is fetched from."""

    location: str = "panchangam.txt"
    timeout: float = 10.0
    encoding: str = "utf8"


def _default_sections() -> Dict[str, str]:
    return {
        "tithi": "Thithi details",
        "nakshatra": "Nakshatram details",
        "yogam": "Yogam details",
        "karanam": "Karanam details",
    }


class LayoutSettings(SectionModel):
    """Labels that identify headers and sections in the almanac text."""

    headers: list[str] = Field(
        default_factory=lambda: ["Samvatsaram", "Ayanam", "Ruthu", "Masam", "Paksham"]
    )
    sections: Dict[str, str] = Field(default_factory=_default_sections)
    backend_label: str = "date and time created"
    summary_prefix: str = "next "

    @field_validator("headers", mode="before")
    @classmethod
    def _coerce_headers(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _split_strings(value)
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return value


class DisplaySettings(SectionModel):
    """Text conventions used by the presenter."""

    not_in_range: str = "Not in range"
    placeholder: str = "–"


class LoggingSettings(SectionModel):
    """Log level applied to the ``panchangam`` logger by the CLI."""

    level: str = "WARNING"


class Settings(BaseSettings):
    """Container for all runtime configuration sections."""

    timezone: TimezoneSettings = Field(default_factory=TimezoneSettings)
    source: SourceSettings = Field(default_factory=SourceSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="PANCHANGAM_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        class LegacyEnvSettingsSource(EnvSettingsSource):
            def decode_complex_value(self, field_name, target_field, value):  # type: ignore[override]
                try:
                    return super().decode_complex_value(field_name, target_field, value)
                except json.JSONDecodeError:
                    return value

        env_settings.__class__ = LegacyEnvSettingsSource
        return init_settings, env_settings, dotenv_settings, file_secret_settings


# ---------------------------------------------------------------------------
# Loading utilities
# ---------------------------------------------------------------------------


def load_settings(path: str | Path) -> Settings:
    """Load settings from a JSON or YAML file."""

    p = Path(path)
    text = p.read_text()
    if p.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise TypeError("Configuration file must define a mapping")
    return Settings.model_validate(data)

"""Tests for license plate rules and engine configuration validation."""

from __future__ import annotations

import pytest

from smartpark.domain.constraints import (
    DEFAULT_LICENSE_PLATE_REGEX,
    EngineConfig,
    format_license_plate,
    validate_engine_config,
    validate_license_plate,
)
from smartpark.utils.config import get_settings


def valid_config(**overrides) -> EngineConfig:
    """Return a valid baseline EngineConfig, optionally overriding fields."""
    defaults = {
        "zone_names": ("Downtown Core", "Tech District"),
        "areas_per_zone": 2,
        "slots_per_area": 10,
        "hourly_rate": 5.0,
        "base_fee": 2.0,
    }
    defaults.update(overrides)
    return EngineConfig(**defaults)


# --- license plates ---

def test_format_license_plate_strips_separators_and_uppercases() -> None:
    assert format_license_plate("ab-12 cd") == "AB12CD"


@pytest.mark.parametrize("plate", ["AB", "abc123", "KA-01 HH 1234", "1234567890"])
def test_validate_license_plate_accepts(plate: str) -> None:
    assert validate_license_plate(plate)


@pytest.mark.parametrize("plate", ["A", "", "  -  ", "ABCDEFGHIJK", "AB_12", "AB.12"])
def test_validate_license_plate_rejects(plate: str) -> None:
    assert not validate_license_plate(plate)


# --- engine config ---

def test_valid_config_passes() -> None:
    validate_engine_config(valid_config())


def test_empty_zone_names_raises() -> None:
    with pytest.raises(ValueError):
        validate_engine_config(valid_config(zone_names=()))


def test_blank_zone_name_raises() -> None:
    with pytest.raises(ValueError):
        validate_engine_config(valid_config(zone_names=("North", "  ")))


def test_areas_per_zone_zero_raises() -> None:
    with pytest.raises(ValueError):
        validate_engine_config(valid_config(areas_per_zone=0))


def test_slots_per_area_above_numbering_limit_raises() -> None:
    """Eleven slots per area would collide with the next area's numbers."""
    with pytest.raises(ValueError):
        validate_engine_config(valid_config(slots_per_area=11))


def test_negative_hourly_rate_raises() -> None:
    with pytest.raises(ValueError):
        validate_engine_config(valid_config(hourly_rate=-0.5))


def test_negative_base_fee_raises() -> None:
    with pytest.raises(ValueError):
        validate_engine_config(valid_config(base_fee=-1.0))


def test_zero_rates_pass() -> None:
    validate_engine_config(valid_config(hourly_rate=0.0, base_fee=0.0))


def test_validate_license_plate_honours_custom_pattern() -> None:
    assert validate_license_plate("ab-c", r"^[A-Z]{3}$")
    assert not validate_license_plate("AB12", r"^[A-Z]{3}$")


def test_settings_plate_regex_defaults_to_domain_rule() -> None:
    assert get_settings().license_plate_regex == DEFAULT_LICENSE_PLATE_REGEX

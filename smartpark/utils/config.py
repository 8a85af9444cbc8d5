"""Runtime settings for the parking allocation engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from smartpark.domain.constraints import DEFAULT_LICENSE_PLATE_REGEX


DEFAULT_ZONE_NAMES: tuple[str, ...] = (
    "Downtown Core",
    "Tech District",
    "Harbor View",
    "Central Plaza",
    "East Gateway",
)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_zone_names(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    app_name: str = "SmartPark Slot Allocation Engine"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    zone_names: tuple[str, ...] = DEFAULT_ZONE_NAMES
    areas_per_zone: int = 2
    slots_per_area: int = 10

    hourly_rate: float = 5.0
    base_fee: float = 2.0
    min_duration_hours: int = 1
    max_duration_hours: int = 24

    license_plate_regex: str = DEFAULT_LICENSE_PLATE_REGEX


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once, applying SMARTPARK_* environment overrides."""
    defaults = Settings()
    return Settings(
        log_level=os.getenv("SMARTPARK_LOG_LEVEL", defaults.log_level),
        zone_names=_env_zone_names("SMARTPARK_ZONE_NAMES", defaults.zone_names),
        areas_per_zone=_env_int("SMARTPARK_AREAS_PER_ZONE", defaults.areas_per_zone),
        slots_per_area=_env_int("SMARTPARK_SLOTS_PER_AREA", defaults.slots_per_area),
        hourly_rate=_env_float("SMARTPARK_HOURLY_RATE", defaults.hourly_rate),
        base_fee=_env_float("SMARTPARK_BASE_FEE", defaults.base_fee),
        max_duration_hours=_env_int(
            "SMARTPARK_MAX_DURATION_HOURS",
            defaults.max_duration_hours,
        ),
    )

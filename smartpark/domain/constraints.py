"""Domain-level validation rules for plates and engine configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass


DEFAULT_LICENSE_PLATE_REGEX = r"^[A-Z0-9]{2,10}$"
_PLATE_SEPARATORS = re.compile(r"[\s-]")

# Slot numbers are zone*100 + area*10 + slot + 1, so both fan-outs stop at 10.
MAX_AREAS_PER_ZONE = 10
MAX_SLOTS_PER_AREA = 10


@dataclass(frozen=True)
class EngineConfig:
    zone_names: tuple[str, ...]
    areas_per_zone: int
    slots_per_area: int
    hourly_rate: float
    base_fee: float


def format_license_plate(plate: str) -> str:
    return _PLATE_SEPARATORS.sub("", plate.upper())


def validate_license_plate(plate: str, pattern: str = DEFAULT_LICENSE_PLATE_REGEX) -> bool:
    """Match the normalized plate; by default 2-10 letters/digits once case,
    spaces and hyphens are ignored."""
    return re.fullmatch(pattern, format_license_plate(plate)) is not None


def validate_engine_config(config: EngineConfig) -> None:
    if not config.zone_names:
        raise ValueError("zone_names must contain at least one zone")
    if any(not name.strip() for name in config.zone_names):
        raise ValueError("zone_names must be non-empty strings")
    if not 0 < config.areas_per_zone <= MAX_AREAS_PER_ZONE:
        raise ValueError(f"areas_per_zone must be in [1, {MAX_AREAS_PER_ZONE}]")
    if not 0 < config.slots_per_area <= MAX_SLOTS_PER_AREA:
        raise ValueError(f"slots_per_area must be in [1, {MAX_SLOTS_PER_AREA}]")
    if config.hourly_rate < 0.0:
        raise ValueError("hourly_rate must be >= 0")
    if config.base_fee < 0.0:
        raise ValueError("base_fee must be >= 0")

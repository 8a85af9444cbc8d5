from __future__ import annotations

import itertools
from dataclasses import replace

import pytest

from smartpark.services.parking_service import ParkingSystemService
from smartpark.utils.config import get_settings


def _build_test_settings(**overrides):
    get_settings.cache_clear()
    return replace(get_settings(), **overrides)


def _build_service(**overrides) -> ParkingSystemService:
    counter = itertools.count(1)
    return ParkingSystemService(
        settings=_build_test_settings(**overrides),
        id_factory=lambda: f"req-{next(counter)}",
    )


@pytest.fixture
def make_service():
    """Factory for engines with settings overrides and sequential request ids."""
    return _build_service


@pytest.fixture
def service() -> ParkingSystemService:
    """Default 5 zones x 2 areas x 10 slots engine."""
    return _build_service()


@pytest.fixture
def small_service() -> ParkingSystemService:
    """Two zones of two slots each, small enough to exhaust."""
    return _build_service(
        zone_names=("North", "South"),
        areas_per_zone=1,
        slots_per_area=2,
    )

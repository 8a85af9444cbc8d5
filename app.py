"""
app.py: FastAPI application factory for the parking allocation engine.

The engine is constructed here and handed to the routers through app.state.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from smartpark.controllers.dashboard_controller import router as dashboard_router
from smartpark.controllers.reservation_controller import router as reservation_router
from smartpark.services.parking_service import ParkingSystemService
from smartpark.utils.config import Settings, get_settings
from smartpark.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    parking_service: Optional[ParkingSystemService] = None,
) -> FastAPI:
    """Build the app and wire one engine instance into app.state."""
    resolved_settings = settings or get_settings()
    service = parking_service or ParkingSystemService(settings=resolved_settings)

    app = FastAPI(
        title=resolved_settings.app_name,
        version=resolved_settings.app_version,
    )
    app.include_router(reservation_router)
    app.include_router(dashboard_router)
    app.state.parking_service = service

    snapshot = service.snapshot()
    logger.info(
        "Application ready | zones=%s | total_slots=%s",
        len(snapshot.zone_stats),
        snapshot.total_slots,
    )
    return app


# Module-level app object for uvicorn
app = create_app()

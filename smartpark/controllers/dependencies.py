"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from smartpark.services.parking_service import ParkingSystemService


def get_parking_service(request: Request) -> ParkingSystemService:
    service = getattr(request.app.state, "parking_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Parking service is not initialized",
        )
    return service

"""Controller layer for read-only dashboard projections."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from smartpark.controllers.dependencies import get_parking_service
from smartpark.controllers.schemas import (
    AnalyticsResponse,
    ChargeResponse,
    OperationLogResponse,
    OperationResponse,
    RequestListResponse,
    ZoneResponse,
    ZonesResponse,
)
from smartpark.services.parking_service import ParkingSystemService
from smartpark.utils.config import get_settings


settings = get_settings()

router = APIRouter(tags=["dashboard"])


@router.get("/health", include_in_schema=False)
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/zones", response_model=ZonesResponse, status_code=status.HTTP_200_OK)
async def list_zones(
    service: ParkingSystemService = Depends(get_parking_service),
) -> ZonesResponse:
    return ZonesResponse(
        zones=[ZoneResponse.from_domain(zone) for zone in service.list_zones()]
    )


@router.get("/pricing", response_model=ChargeResponse, status_code=status.HTTP_200_OK)
async def pricing(
    duration_hours: int = Query(
        ge=settings.min_duration_hours,
        le=settings.max_duration_hours,
    ),
    service: ParkingSystemService = Depends(get_parking_service),
) -> ChargeResponse:
    """Live price preview before booking."""
    return ChargeResponse.from_domain(duration_hours, service.compute_charges(duration_hours))


@router.get(
    "/requests/active",
    response_model=RequestListResponse,
    status_code=status.HTTP_200_OK,
)
async def active_requests(
    service: ParkingSystemService = Depends(get_parking_service),
) -> RequestListResponse:
    return RequestListResponse.from_domain(service.list_active_requests())


@router.get(
    "/requests/history",
    response_model=RequestListResponse,
    status_code=status.HTTP_200_OK,
)
async def history_requests(
    service: ParkingSystemService = Depends(get_parking_service),
) -> RequestListResponse:
    return RequestListResponse.from_domain(service.list_history_requests())


@router.get("/analytics", response_model=AnalyticsResponse, status_code=status.HTTP_200_OK)
async def analytics(
    service: ParkingSystemService = Depends(get_parking_service),
) -> AnalyticsResponse:
    return AnalyticsResponse.from_domain(service.snapshot())


@router.get("/operations", response_model=OperationLogResponse, status_code=status.HTTP_200_OK)
async def operations(
    service: ParkingSystemService = Depends(get_parking_service),
) -> OperationLogResponse:
    return OperationLogResponse(
        operations=[OperationResponse.from_domain(item) for item in service.operation_log()]
    )

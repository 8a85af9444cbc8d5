"""HTTP controller layer for slot allocation and request lifecycle."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from smartpark.controllers.dependencies import get_parking_service
from smartpark.controllers.schemas import (
    AllocateRequest,
    ParkingRequestResponse,
    RollbackRequest,
    RollbackResponse,
)
from smartpark.services.parking_service import ParkingSystemService
from smartpark.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["reservations"])


def _transition_failure(
    service: ParkingSystemService,
    request_id: str,
    action: str,
) -> HTTPException:
    request = service.get_request(request_id)
    if request is None:
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Request {request_id} not found",
        )
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Cannot {action} request in status {request.status.value}",
    )


@router.post(
    "/allocate",
    response_model=ParkingRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def allocate(
    payload: AllocateRequest,
    service: ParkingSystemService = Depends(get_parking_service),
) -> ParkingRequestResponse:
    """Allocate a slot in the requested zone or the first zone with capacity."""
    try:
        request = service.allocate(
            zone_id=payload.zone_id,
            license_plate=payload.license_plate,
            duration_hours=payload.duration_hours,
        )
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected allocation failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to allocate slot",
        ) from exc
    if request is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No parking slot available in any zone",
        )
    return ParkingRequestResponse.from_domain(request)


@router.post(
    "/requests/{request_id}/release",
    response_model=ParkingRequestResponse,
    status_code=status.HTTP_200_OK,
)
async def release(
    request_id: str,
    service: ParkingSystemService = Depends(get_parking_service),
) -> ParkingRequestResponse:
    try:
        released = service.release(request_id)
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected release failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to release slot",
        ) from exc
    if not released:
        raise _transition_failure(service, request_id, "release")
    return ParkingRequestResponse.from_domain(service.get_request(request_id))


@router.post(
    "/requests/{request_id}/cancel",
    response_model=ParkingRequestResponse,
    status_code=status.HTTP_200_OK,
)
async def cancel(
    request_id: str,
    service: ParkingSystemService = Depends(get_parking_service),
) -> ParkingRequestResponse:
    try:
        cancelled = service.cancel(request_id)
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected cancellation failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to cancel request",
        ) from exc
    if not cancelled:
        raise _transition_failure(service, request_id, "cancel")
    return ParkingRequestResponse.from_domain(service.get_request(request_id))


@router.post(
    "/rollback",
    response_model=RollbackResponse,
    status_code=status.HTTP_200_OK,
)
async def rollback(
    payload: RollbackRequest,
    service: ParkingSystemService = Depends(get_parking_service),
) -> RollbackResponse:
    """Undo allocations among the last ``steps`` operations."""
    try:
        success = service.rollback(payload.steps)
        return RollbackResponse(
            success=success,
            operations_remaining=len(service.operation_log()),
        )
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected rollback failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to roll back operations",
        ) from exc

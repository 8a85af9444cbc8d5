"""Request/response DTOs shared by the HTTP controllers."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from smartpark.domain.constraints import format_license_plate, validate_license_plate
from smartpark.domain.models import (
    AllocationOperation,
    ChargeBreakdown,
    OperationKind,
    ParkingRequest,
    RequestStatus,
    SystemAnalytics,
    Zone,
)
from smartpark.utils.config import get_settings


settings = get_settings()


class AllocateRequest(BaseModel):
    """Input DTO validated before entering the engine."""

    zone_id: str = Field(min_length=1)
    license_plate: str = Field(min_length=1)
    duration_hours: int = Field(
        ge=settings.min_duration_hours,
        le=settings.max_duration_hours,
    )

    @field_validator("license_plate")
    @classmethod
    def validate_plate(cls, value: str) -> str:
        if not validate_license_plate(value, settings.license_plate_regex):
            raise ValueError("license_plate must be 2-10 letters or digits")
        return format_license_plate(value)


class RollbackRequest(BaseModel):
    steps: int = Field(ge=0)


class RollbackResponse(BaseModel):
    success: bool
    operations_remaining: int = Field(ge=0)


class ChargeResponse(BaseModel):
    duration_hours: int = Field(gt=0)
    hourly_rate: float = Field(ge=0.0)
    base_fee: float = Field(ge=0.0)
    total: float = Field(ge=0.0)

    @classmethod
    def from_domain(cls, duration_hours: int, charges: ChargeBreakdown) -> "ChargeResponse":
        return cls(
            duration_hours=duration_hours,
            hourly_rate=charges.hourly_rate,
            base_fee=charges.base_fee,
            total=charges.total,
        )


class ParkingRequestResponse(BaseModel):
    request_id: str
    license_plate: str
    zone_id: str
    slot_id: Optional[str] = None
    slot_number: Optional[int] = None
    duration_hours: int = Field(gt=0)
    hourly_rate: float = Field(ge=0.0)
    base_fee: float = Field(ge=0.0)
    total_charges: float = Field(ge=0.0)
    status: RequestStatus
    created_at: datetime
    allocated_at: Optional[datetime] = None
    released_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, request: ParkingRequest) -> "ParkingRequestResponse":
        return cls(
            request_id=request.request_id,
            license_plate=request.license_plate,
            zone_id=request.zone_id,
            slot_id=request.slot_id,
            slot_number=request.slot_number,
            duration_hours=request.duration_hours,
            hourly_rate=request.hourly_rate,
            base_fee=request.base_fee,
            total_charges=request.total_charges,
            status=request.status,
            created_at=request.created_at,
            allocated_at=request.allocated_at,
            released_at=request.released_at,
        )


class RequestListResponse(BaseModel):
    requests: list[ParkingRequestResponse]
    count: int = Field(ge=0)

    @classmethod
    def from_domain(cls, requests: list[ParkingRequest]) -> "RequestListResponse":
        return cls(
            requests=[ParkingRequestResponse.from_domain(item) for item in requests],
            count=len(requests),
        )


class SlotResponse(BaseModel):
    slot_id: str
    slot_number: int = Field(gt=0)
    is_available: bool


class AreaResponse(BaseModel):
    area_id: str
    name: str
    slots: list[SlotResponse]


class ZoneResponse(BaseModel):
    zone_id: str
    name: str
    total_slots: int = Field(ge=0)
    available_slots: int = Field(ge=0)
    areas: list[AreaResponse]

    @classmethod
    def from_domain(cls, zone: Zone) -> "ZoneResponse":
        return cls(
            zone_id=zone.zone_id,
            name=zone.name,
            total_slots=zone.total_slots,
            available_slots=zone.available_slots,
            areas=[
                AreaResponse(
                    area_id=area.area_id,
                    name=area.name,
                    slots=[
                        SlotResponse(
                            slot_id=slot.slot_id,
                            slot_number=slot.slot_number,
                            is_available=slot.is_available,
                        )
                        for slot in area.slots
                    ],
                )
                for area in zone.areas
            ],
        )


class ZonesResponse(BaseModel):
    zones: list[ZoneResponse]


class ZoneStatsResponse(BaseModel):
    zone_id: str
    zone_name: str
    total: int = Field(ge=0)
    occupied: int = Field(ge=0)
    available: int = Field(ge=0)
    occupancy_percent: int = Field(ge=0, le=100)
    status_label: str


class AnalyticsResponse(BaseModel):
    total_slots: int = Field(ge=0)
    occupied_slots: int = Field(ge=0)
    available_slots: int = Field(ge=0)
    active_requests: int = Field(ge=0)
    completed_sessions: int = Field(ge=0)
    cancelled_sessions: int = Field(ge=0)
    total_revenue: float = Field(ge=0.0)
    occupancy_percent: int = Field(ge=0, le=100)
    completion_rate: int = Field(ge=0, le=100)
    zone_stats: list[ZoneStatsResponse]

    @classmethod
    def from_domain(cls, analytics: SystemAnalytics) -> "AnalyticsResponse":
        return cls(
            total_slots=analytics.total_slots,
            occupied_slots=analytics.occupied_slots,
            available_slots=analytics.available_slots,
            active_requests=analytics.active_requests,
            completed_sessions=analytics.completed_sessions,
            cancelled_sessions=analytics.cancelled_sessions,
            total_revenue=analytics.total_revenue,
            occupancy_percent=analytics.occupancy_percent,
            completion_rate=analytics.completion_rate,
            zone_stats=[
                ZoneStatsResponse(
                    zone_id=item.zone_id,
                    zone_name=item.zone_name,
                    total=item.total,
                    occupied=item.occupied,
                    available=item.available,
                    occupancy_percent=item.occupancy_percent,
                    status_label=item.status_label,
                )
                for item in analytics.zone_stats
            ],
        )


class OperationResponse(BaseModel):
    kind: OperationKind
    request_id: str
    slot_id: str
    timestamp: datetime

    @classmethod
    def from_domain(cls, operation: AllocationOperation) -> "OperationResponse":
        return cls(
            kind=operation.kind,
            request_id=operation.request_id,
            slot_id=operation.slot_id,
            timestamp=operation.timestamp,
        )


class OperationLogResponse(BaseModel):
    operations: list[OperationResponse]

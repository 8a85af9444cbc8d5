"""Domain models for zone inventory, parking requests, and analytics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterator, Optional


class RequestStatus(str, Enum):
    REQUESTED = "REQUESTED"
    ALLOCATED = "ALLOCATED"
    OCCUPIED = "OCCUPIED"
    RELEASED = "RELEASED"
    CANCELLED = "CANCELLED"


ACTIVE_STATUSES = frozenset({RequestStatus.ALLOCATED, RequestStatus.OCCUPIED})
TERMINAL_STATUSES = frozenset({RequestStatus.RELEASED, RequestStatus.CANCELLED})


class OperationKind(str, Enum):
    ALLOCATE = "ALLOCATE"
    RELEASE = "RELEASE"
    CANCEL = "CANCEL"


@dataclass
class ParkingSlot:
    slot_id: str
    zone_id: str
    area_id: str
    slot_number: int
    is_available: bool = True


@dataclass
class ParkingArea:
    area_id: str
    name: str
    zone_id: str
    slots: list[ParkingSlot] = field(default_factory=list)


@dataclass
class Zone:
    zone_id: str
    name: str
    areas: list[ParkingArea]
    total_slots: int
    available_slots: int

    def iter_slots(self) -> Iterator[ParkingSlot]:
        for area in self.areas:
            yield from area.slots


@dataclass
class ParkingRequest:
    request_id: str
    license_plate: str
    zone_id: str
    slot_id: Optional[str]
    slot_number: Optional[int]
    duration_hours: int
    hourly_rate: float
    base_fee: float
    total_charges: float
    status: RequestStatus
    created_at: datetime
    allocated_at: Optional[datetime] = None
    released_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


@dataclass(frozen=True)
class AllocationOperation:
    kind: OperationKind
    request_id: str
    slot_id: str
    timestamp: datetime


@dataclass(frozen=True)
class ChargeBreakdown:
    hourly_rate: float
    base_fee: float
    total: float


@dataclass(frozen=True)
class ZoneStats:
    zone_id: str
    zone_name: str
    total: int
    occupied: int
    available: int
    occupancy_percent: int
    status_label: str


@dataclass(frozen=True)
class SystemAnalytics:
    total_slots: int
    occupied_slots: int
    available_slots: int
    active_requests: int
    completed_sessions: int
    cancelled_sessions: int
    total_revenue: float
    occupancy_percent: int
    completion_rate: int
    zone_stats: list[ZoneStats]

"""Slot allocation with per-zone FIFO queues and cross-zone fallback."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import uuid4

from smartpark.domain.constraints import format_license_plate
from smartpark.domain.models import (
    AllocationOperation,
    ChargeBreakdown,
    OperationKind,
    ParkingRequest,
    RequestStatus,
)
from smartpark.repository.inventory_repository import InventoryRepository
from smartpark.utils.logger import get_logger, log_event


logger = get_logger(__name__)

HOURLY_RATE = 5.0
BASE_FEE = 2.0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_request_id() -> str:
    return uuid4().hex


def compute_charges(
    duration_hours: int,
    hourly_rate: float = HOURLY_RATE,
    base_fee: float = BASE_FEE,
) -> ChargeBreakdown:
    """Price a stay: ``duration_hours * hourly_rate + base_fee``, no proration."""
    total = duration_hours * hourly_rate + base_fee
    return ChargeBreakdown(hourly_rate=hourly_rate, base_fee=base_fee, total=total)


class AllocationService:
    """Allocates slots and records ALLOCATE operations."""

    def __init__(
        self,
        repository: InventoryRepository,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = generate_request_id,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self._id_factory = id_factory

    def compute_charges(self, duration_hours: int) -> ChargeBreakdown:
        settings = self._repository.settings
        return compute_charges(
            duration_hours,
            hourly_rate=settings.hourly_rate,
            base_fee=settings.base_fee,
        )

    def resolve_zone(self, zone_id: str) -> Optional[str]:
        """Pick the requested zone if it has capacity, else the first zone that does."""
        if self._repository.has_free_slot(zone_id):
            return zone_id
        for zone in self._repository.zones:
            if self._repository.has_free_slot(zone.zone_id):
                return zone.zone_id
        return None

    def allocate(
        self,
        zone_id: str,
        license_plate: str,
        duration_hours: int,
    ) -> Optional[ParkingRequest]:
        target_zone_id = self.resolve_zone(zone_id)
        if target_zone_id is None:
            log_event(
                logger,
                "Allocation rejected, no free slot in any zone",
                requested_zone=zone_id,
            )
            return None
        if target_zone_id != zone_id:
            log_event(
                logger,
                "Cross-zone fallback",
                requested_zone=zone_id,
                allocated_zone=target_zone_id,
            )

        # Everything that can fail runs before the slot leaves its queue.
        charges = self.compute_charges(duration_hours)
        plate = format_license_plate(license_plate)
        request_id = self._id_factory()
        now = self._clock()

        slot = self._repository.take_free_slot(target_zone_id)
        request = ParkingRequest(
            request_id=request_id,
            license_plate=plate,
            zone_id=target_zone_id,
            slot_id=slot.slot_id,
            slot_number=slot.slot_number,
            duration_hours=duration_hours,
            hourly_rate=charges.hourly_rate,
            base_fee=charges.base_fee,
            total_charges=charges.total,
            status=RequestStatus.ALLOCATED,
            created_at=now,
            allocated_at=now,
        )
        self._repository.add_request(request)
        self._repository.append_operation(
            AllocationOperation(
                kind=OperationKind.ALLOCATE,
                request_id=request.request_id,
                slot_id=slot.slot_id,
                timestamp=now,
            )
        )
        log_event(
            logger,
            "Slot allocated",
            request_id=request.request_id,
            zone_id=target_zone_id,
            slot_number=slot.slot_number,
            total_charges=f"{charges.total:.2f}",
        )
        return request

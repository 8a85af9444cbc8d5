"""In-memory inventory repository owning all mutable engine state.

The repository holds the zone hierarchy, one FIFO free-slot queue per zone,
the request table and the append-only operation log. It exposes primitive
slot/request/log mutations only; lifecycle rules live in the service layer,
and locking lives in ``ParkingSystemService``.
"""

from __future__ import annotations

from collections import deque
from typing import Iterator, Optional, Sequence

from smartpark.domain.constraints import EngineConfig, validate_engine_config
from smartpark.domain.models import (
    AllocationOperation,
    ParkingArea,
    ParkingRequest,
    ParkingSlot,
    Zone,
)
from smartpark.utils.config import Settings, get_settings
from smartpark.utils.logger import get_logger, log_event


logger = get_logger(__name__)


def build_zones(
    zone_names: Sequence[str],
    areas_per_zone: int,
    slots_per_area: int,
) -> list[Zone]:
    """Build the static zone -> area -> slot hierarchy, all slots available."""
    zones: list[Zone] = []
    for zone_index, name in enumerate(zone_names):
        zone_id = f"zone-{zone_index + 1}"
        areas: list[ParkingArea] = []
        for area_index in range(areas_per_zone):
            area_id = f"{zone_id}-area-{area_index + 1}"
            slots = [
                ParkingSlot(
                    slot_id=f"{area_id}-slot-{slot_index + 1}",
                    zone_id=zone_id,
                    area_id=area_id,
                    slot_number=zone_index * 100 + area_index * 10 + slot_index + 1,
                )
                for slot_index in range(slots_per_area)
            ]
            areas.append(
                ParkingArea(
                    area_id=area_id,
                    name=f"Area {chr(ord('A') + area_index)}",
                    zone_id=zone_id,
                    slots=slots,
                )
            )
        capacity = areas_per_zone * slots_per_area
        zones.append(
            Zone(
                zone_id=zone_id,
                name=name,
                areas=areas,
                total_slots=capacity,
                available_slots=capacity,
            )
        )
    return zones


def engine_config_from_settings(settings: Settings) -> EngineConfig:
    return EngineConfig(
        zone_names=tuple(settings.zone_names),
        areas_per_zone=settings.areas_per_zone,
        slots_per_area=settings.slots_per_area,
        hourly_rate=settings.hourly_rate,
        base_fee=settings.base_fee,
    )


class InventoryRepository:
    """Owns zones, free-slot queues, the request table, and the operation log."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        config = engine_config_from_settings(self._settings)
        validate_engine_config(config)

        self._zones = build_zones(
            config.zone_names,
            config.areas_per_zone,
            config.slots_per_area,
        )
        self._zone_by_id: dict[str, Zone] = {zone.zone_id: zone for zone in self._zones}
        self._slot_by_id: dict[str, ParkingSlot] = {}
        self._free_queues: dict[str, deque[str]] = {}
        for zone in self._zones:
            queue: deque[str] = deque()
            for slot in zone.iter_slots():
                self._slot_by_id[slot.slot_id] = slot
                queue.append(slot.slot_id)
            self._free_queues[zone.zone_id] = queue

        self._requests: dict[str, ParkingRequest] = {}
        self._operations: list[AllocationOperation] = []
        log_event(
            logger,
            "Inventory initialized",
            zones=len(self._zones),
            total_slots=len(self._slot_by_id),
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    # --- zones and slots ---

    @property
    def zones(self) -> list[Zone]:
        return self._zones

    def get_zone(self, zone_id: str) -> Optional[Zone]:
        return self._zone_by_id.get(zone_id)

    def get_slot(self, slot_id: str) -> Optional[ParkingSlot]:
        return self._slot_by_id.get(slot_id)

    def all_slot_ids(self) -> set[str]:
        return set(self._slot_by_id)

    def free_queue(self, zone_id: str) -> tuple[str, ...]:
        """Snapshot of a zone's free queue, head first."""
        return tuple(self._free_queues.get(zone_id, ()))

    def has_free_slot(self, zone_id: str) -> bool:
        return bool(self._free_queues.get(zone_id))

    def take_free_slot(self, zone_id: str) -> ParkingSlot:
        """Pop the head of a zone's queue and mark the slot occupied."""
        slot_id = self._free_queues[zone_id].popleft()
        slot = self._slot_by_id[slot_id]
        slot.is_available = False
        self._zone_by_id[zone_id].available_slots -= 1
        return slot

    def return_slot(self, zone_id: str, slot_id: str) -> None:
        """Push a slot back at the tail of its zone's queue and mark it free."""
        self._free_queues[zone_id].append(slot_id)
        self._slot_by_id[slot_id].is_available = True
        self._zone_by_id[zone_id].available_slots += 1

    # --- requests ---

    def add_request(self, request: ParkingRequest) -> None:
        self._requests[request.request_id] = request

    def get_request(self, request_id: str) -> Optional[ParkingRequest]:
        return self._requests.get(request_id)

    def delete_request(self, request_id: str) -> Optional[ParkingRequest]:
        return self._requests.pop(request_id, None)

    def iter_requests(self) -> Iterator[ParkingRequest]:
        return iter(self._requests.values())

    # --- operation log ---

    def append_operation(self, operation: AllocationOperation) -> None:
        self._operations.append(operation)

    def recent_operations(self, count: int) -> list[AllocationOperation]:
        if count <= 0:
            return []
        return self._operations[-count:]

    def truncate_operations(self, count: int) -> None:
        if count <= 0:
            return
        del self._operations[-count:]

    @property
    def operations(self) -> tuple[AllocationOperation, ...]:
        return tuple(self._operations)

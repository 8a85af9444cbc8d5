"""Engine facade guarding all parking state behind one lock."""

from __future__ import annotations

import copy
from datetime import datetime
from threading import RLock
from typing import Callable, Optional

from smartpark.domain.models import (
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    AllocationOperation,
    ChargeBreakdown,
    ParkingRequest,
    SystemAnalytics,
    Zone,
)
from smartpark.repository.inventory_repository import InventoryRepository
from smartpark.services.allocation_service import (
    AllocationService,
    generate_request_id,
    utc_now,
)
from smartpark.services.analytics_service import AnalyticsService
from smartpark.services.lifecycle_service import LifecycleService
from smartpark.services.rollback_service import RollbackService
from smartpark.utils.config import Settings, get_settings


class ParkingSystemService:
    """Coordinates allocate -> release/cancel -> rollback -> snapshot.

    Every public call runs under a single re-entrant lock so that the zone
    counters, free queues, request table and operation log change together.
    Read methods hand out deep copies; callers never see live engine objects.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        repository: Optional[InventoryRepository] = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = generate_request_id,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or InventoryRepository(self._settings)
        self._allocation_service = AllocationService(
            repository=self._repository,
            clock=clock,
            id_factory=id_factory,
        )
        self._lifecycle_service = LifecycleService(repository=self._repository, clock=clock)
        self._rollback_service = RollbackService(repository=self._repository)
        self._analytics_service = AnalyticsService(repository=self._repository)
        self._lock = RLock()

    @property
    def settings(self) -> Settings:
        return self._settings

    # --- mutations ---

    def allocate(
        self,
        zone_id: str,
        license_plate: str,
        duration_hours: int,
    ) -> Optional[ParkingRequest]:
        with self._lock:
            request = self._allocation_service.allocate(zone_id, license_plate, duration_hours)
            return copy.deepcopy(request)

    def release(self, request_id: str) -> bool:
        with self._lock:
            return self._lifecycle_service.release(request_id)

    def cancel(self, request_id: str) -> bool:
        with self._lock:
            return self._lifecycle_service.cancel(request_id)

    def rollback(self, steps: int) -> bool:
        with self._lock:
            return self._rollback_service.rollback(steps)

    # --- reads ---

    def compute_charges(self, duration_hours: int) -> ChargeBreakdown:
        return self._allocation_service.compute_charges(duration_hours)

    def snapshot(self) -> SystemAnalytics:
        with self._lock:
            return self._analytics_service.snapshot()

    def list_zones(self) -> list[Zone]:
        with self._lock:
            return copy.deepcopy(self._repository.zones)

    def get_request(self, request_id: str) -> Optional[ParkingRequest]:
        with self._lock:
            return copy.deepcopy(self._repository.get_request(request_id))

    def list_requests(self) -> list[ParkingRequest]:
        with self._lock:
            return copy.deepcopy(list(self._repository.iter_requests()))

    def list_active_requests(self) -> list[ParkingRequest]:
        with self._lock:
            return copy.deepcopy(
                [
                    request
                    for request in self._repository.iter_requests()
                    if request.status in ACTIVE_STATUSES
                ]
            )

    def list_history_requests(self) -> list[ParkingRequest]:
        with self._lock:
            return copy.deepcopy(
                [
                    request
                    for request in self._repository.iter_requests()
                    if request.status in TERMINAL_STATUSES
                ]
            )

    def operation_log(self) -> tuple[AllocationOperation, ...]:
        with self._lock:
            return self._repository.operations

    def free_queue(self, zone_id: str) -> tuple[str, ...]:
        with self._lock:
            return self._repository.free_queue(zone_id)

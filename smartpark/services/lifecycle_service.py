"""Request lifecycle transitions: release and cancel.

ALLOCATED/OCCUPIED --release--> RELEASED
REQUESTED/ALLOCATED/OCCUPIED --cancel--> CANCELLED
RELEASED and CANCELLED are terminal.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from smartpark.domain.models import (
    ACTIVE_STATUSES,
    AllocationOperation,
    OperationKind,
    ParkingRequest,
    RequestStatus,
)
from smartpark.repository.inventory_repository import InventoryRepository
from smartpark.services.allocation_service import utc_now
from smartpark.utils.logger import get_logger, log_event


logger = get_logger(__name__)


class LifecycleService:
    def __init__(
        self,
        repository: InventoryRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def _free_slot(self, request: ParkingRequest) -> None:
        if request.slot_id is not None:
            self._repository.return_slot(request.zone_id, request.slot_id)

    def release(self, request_id: str) -> bool:
        request = self._repository.get_request(request_id)
        if request is None:
            log_event(logger, "Release rejected, unknown request", request_id=request_id)
            return False
        if request.status not in ACTIVE_STATUSES or request.slot_id is None:
            log_event(
                logger,
                "Release rejected, illegal transition",
                request_id=request_id,
                status=request.status.value,
            )
            return False

        now = self._clock()
        self._free_slot(request)
        request.status = RequestStatus.RELEASED
        request.released_at = now
        self._repository.append_operation(
            AllocationOperation(
                kind=OperationKind.RELEASE,
                request_id=request_id,
                slot_id=request.slot_id,
                timestamp=now,
            )
        )
        log_event(
            logger,
            "Slot released",
            request_id=request_id,
            zone_id=request.zone_id,
            slot_number=request.slot_number,
        )
        return True

    def cancel(self, request_id: str) -> bool:
        request = self._repository.get_request(request_id)
        if request is None:
            log_event(logger, "Cancel rejected, unknown request", request_id=request_id)
            return False
        if request.is_terminal:
            log_event(
                logger,
                "Cancel rejected, illegal transition",
                request_id=request_id,
                status=request.status.value,
            )
            return False

        now = self._clock()
        self._free_slot(request)
        request.status = RequestStatus.CANCELLED
        request.released_at = now
        self._repository.append_operation(
            AllocationOperation(
                kind=OperationKind.CANCEL,
                request_id=request_id,
                slot_id=request.slot_id or "",
                timestamp=now,
            )
        )
        log_event(logger, "Request cancelled", request_id=request_id, zone_id=request.zone_id)
        return True

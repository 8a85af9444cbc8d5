"""Bounded LIFO undo over the operation log.

Only ALLOCATE entries are reverted: the slot goes back to its zone's queue and
the request is erased. RELEASE and CANCEL entries inside the window are
dropped from the log without being reverted.
"""

from __future__ import annotations

import logging

from smartpark.domain.models import AllocationOperation, OperationKind
from smartpark.repository.inventory_repository import InventoryRepository
from smartpark.utils.logger import get_logger, log_event


logger = get_logger(__name__)


class RollbackService:
    def __init__(self, repository: InventoryRepository) -> None:
        self._repository = repository

    def _undo_allocation(self, operation: AllocationOperation) -> bool:
        request = self._repository.get_request(operation.request_id)
        if request is None:
            log_event(
                logger,
                "Rollback skipped entry for missing request",
                logging.WARNING,
                request_id=operation.request_id,
            )
            return False

        # A released or cancelled request already gave its slot back.
        if request.is_active and operation.slot_id:
            self._repository.return_slot(request.zone_id, operation.slot_id)
        self._repository.delete_request(operation.request_id)
        return True

    def rollback(self, steps: int) -> bool:
        window = self._repository.recent_operations(steps)
        reverted = 0
        skipped = 0
        for operation in reversed(window):
            if operation.kind is not OperationKind.ALLOCATE:
                skipped += 1
                continue
            if self._undo_allocation(operation):
                reverted += 1

        self._repository.truncate_operations(steps)
        log_event(
            logger,
            "Rollback completed",
            requested_steps=steps,
            processed=len(window),
            reverted_allocations=reverted,
            skipped_entries=skipped,
            remaining=len(self._repository.operations),
        )
        return True

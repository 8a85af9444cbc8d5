"""Occupancy and revenue analytics recomputed from current engine state."""

from __future__ import annotations

import math

from smartpark.domain.models import (
    ACTIVE_STATUSES,
    RequestStatus,
    SystemAnalytics,
    ZoneStats,
)
from smartpark.repository.inventory_repository import InventoryRepository


FULL_THRESHOLD_PERCENT = 90
FILLING_FAST_THRESHOLD_PERCENT = 70


def _rounded_percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    # Ratio first, then half-up rounding, matching the dashboard percentages.
    return math.floor(part / whole * 100 + 0.5)


def occupancy_percent(occupied: int, total: int) -> int:
    return _rounded_percent(occupied, total)


def completion_rate(completed: int, history_size: int) -> int:
    """Share of finished sessions that were released rather than cancelled."""
    return _rounded_percent(completed, history_size)


def zone_status_label(percent: int) -> str:
    if percent >= FULL_THRESHOLD_PERCENT:
        return "Full"
    if percent >= FILLING_FAST_THRESHOLD_PERCENT:
        return "Filling Fast"
    return "Available"


class AnalyticsService:
    def __init__(self, repository: InventoryRepository) -> None:
        self._repository = repository

    def snapshot(self) -> SystemAnalytics:
        zones = self._repository.zones
        total_slots = sum(zone.total_slots for zone in zones)
        available_slots = sum(zone.available_slots for zone in zones)
        occupied_slots = total_slots - available_slots

        active = completed = cancelled = 0
        revenue = 0.0
        for request in self._repository.iter_requests():
            if request.status in ACTIVE_STATUSES:
                active += 1
            elif request.status is RequestStatus.RELEASED:
                completed += 1
                revenue += request.total_charges
            elif request.status is RequestStatus.CANCELLED:
                cancelled += 1

        zone_stats: list[ZoneStats] = []
        for zone in zones:
            occupied = zone.total_slots - zone.available_slots
            percent = occupancy_percent(occupied, zone.total_slots)
            zone_stats.append(
                ZoneStats(
                    zone_id=zone.zone_id,
                    zone_name=zone.name,
                    total=zone.total_slots,
                    occupied=occupied,
                    available=zone.available_slots,
                    occupancy_percent=percent,
                    status_label=zone_status_label(percent),
                )
            )

        return SystemAnalytics(
            total_slots=total_slots,
            occupied_slots=occupied_slots,
            available_slots=available_slots,
            active_requests=active,
            completed_sessions=completed,
            cancelled_sessions=cancelled,
            total_revenue=revenue,
            occupancy_percent=occupancy_percent(occupied_slots, total_slots),
            completion_rate=completion_rate(completed, completed + cancelled),
            zone_stats=zone_stats,
        )

from __future__ import annotations

import pytest

from smartpark.domain.models import OperationKind, RequestStatus
from smartpark.services.allocation_service import compute_charges
from smartpark.services.parking_service import ParkingSystemService
from smartpark.utils.config import get_settings


@pytest.mark.parametrize("duration", [1, 2, 3, 8, 24])
def test_compute_charges_formula(duration):
    charges = compute_charges(duration)
    assert charges.hourly_rate == 5.0
    assert charges.base_fee == 2.0
    assert charges.total == duration * 5.0 + 2.0


def test_compute_charges_reference_value(service):
    assert compute_charges(3).total == 17.0
    assert service.compute_charges(3).total == 17.0


def test_compute_charges_uses_configured_rates(make_service):
    service = make_service(hourly_rate=3.5, base_fee=1.0)
    charges = service.compute_charges(4)
    assert charges.hourly_rate == 3.5
    assert charges.total == 15.0


def test_allocate_binds_first_slot_and_records_operation(service):
    request = service.allocate("zone-1", "ab-12 cd", 2)

    assert request is not None
    assert request.request_id == "req-1"
    assert request.license_plate == "AB12CD"
    assert request.zone_id == "zone-1"
    assert request.slot_id == "zone-1-area-1-slot-1"
    assert request.slot_number == 1
    assert request.status is RequestStatus.ALLOCATED
    assert request.total_charges == 12.0
    assert request.allocated_at == request.created_at
    assert request.released_at is None

    operations = service.operation_log()
    assert len(operations) == 1
    assert operations[0].kind is OperationKind.ALLOCATE
    assert operations[0].request_id == request.request_id
    assert operations[0].slot_id == request.slot_id


def test_allocation_is_fifo_in_creation_order(service):
    slot_numbers = [service.allocate("zone-2", f"CAR{i}", 1).slot_number for i in range(12)]
    assert slot_numbers == [101, 102, 103, 104, 105, 106, 107, 108, 109, 110, 111, 112]


def test_freed_slots_are_served_after_older_free_slots(small_service):
    first = small_service.allocate("zone-1", "AA11", 1)
    second = small_service.allocate("zone-1", "BB22", 1)
    assert small_service.release(first.request_id)
    assert small_service.release(second.request_id)

    assert small_service.free_queue("zone-1") == (first.slot_id, second.slot_id)
    again = small_service.allocate("zone-1", "CC33", 1)
    assert again.slot_id == first.slot_id


def test_cross_zone_fallback_uses_first_zone_with_capacity(make_service):
    service = make_service(
        zone_names=("North", "South", "East"),
        areas_per_zone=1,
        slots_per_area=1,
    )
    assert service.allocate("zone-2", "AA11", 1).zone_id == "zone-2"

    fallback = service.allocate("zone-2", "BB22", 1)
    assert fallback.zone_id == "zone-1"
    assert fallback.slot_number == 1

    second_fallback = service.allocate("zone-2", "CC33", 1)
    assert second_fallback.zone_id == "zone-3"

    zones = {zone.zone_id: zone for zone in service.list_zones()}
    assert all(zone.available_slots == 0 for zone in zones.values())


def test_unknown_zone_falls_back_to_first_zone(service):
    request = service.allocate("zone-missing", "AA11", 1)
    assert request.zone_id == "zone-1"


def test_allocate_returns_none_when_every_zone_is_full(small_service):
    for index in range(4):
        assert small_service.allocate("zone-1", f"CAR{index}", 1) is not None

    before = small_service.snapshot()
    assert small_service.allocate("zone-2", "LATE1", 1) is None

    after = small_service.snapshot()
    assert after == before
    assert len(small_service.operation_log()) == 4
    assert len(small_service.list_requests()) == 4


def test_returned_request_is_a_copy(service):
    request = service.allocate("zone-1", "AA11", 1)
    request.status = RequestStatus.CANCELLED

    assert service.get_request(request.request_id).status is RequestStatus.ALLOCATED


def _assert_untouched(service, zone_id="zone-1"):
    zone = next(item for item in service.list_zones() if item.zone_id == zone_id)
    assert zone.available_slots == zone.total_slots
    assert all(slot.is_available for slot in zone.iter_slots())
    assert len(service.free_queue(zone_id)) == zone.total_slots
    assert service.list_requests() == []
    assert service.operation_log() == ()


def test_allocate_leaves_state_untouched_when_id_factory_fails():
    def broken_id_factory() -> str:
        raise RuntimeError("id source unavailable")

    service = ParkingSystemService(settings=get_settings(), id_factory=broken_id_factory)
    with pytest.raises(RuntimeError):
        service.allocate("zone-1", "AB12", 2)

    _assert_untouched(service)


def test_allocate_leaves_state_untouched_when_pricing_fails(service):
    with pytest.raises(TypeError):
        service.allocate("zone-1", "AB12", "2")

    _assert_untouched(service)

from __future__ import annotations

from smartpark.domain.models import OperationKind, RequestStatus


def _zone(service, zone_id):
    return next(zone for zone in service.list_zones() if zone.zone_id == zone_id)


def test_release_returns_slot_and_keeps_charges(service):
    request = service.allocate("zone-1", "AA11", 4)

    assert service.release(request.request_id) is True

    released = service.get_request(request.request_id)
    assert released.status is RequestStatus.RELEASED
    assert released.released_at is not None
    assert released.total_charges == 22.0
    assert _zone(service, "zone-1").available_slots == 20
    assert service.free_queue("zone-1")[-1] == request.slot_id
    assert service.operation_log()[-1].kind is OperationKind.RELEASE


def test_double_release_fails_second_time(service):
    request = service.allocate("zone-1", "AA11", 1)

    assert service.release(request.request_id) is True
    assert service.release(request.request_id) is False
    assert _zone(service, "zone-1").available_slots == 20
    assert len(service.operation_log()) == 2


def test_release_unknown_request_fails(service):
    assert service.release("does-not-exist") is False
    assert service.operation_log() == ()


def test_cancel_active_request_returns_slot_to_queue_tail(service):
    request = service.allocate("zone-3", "AA11", 2)
    before = service.snapshot().available_slots

    assert service.cancel(request.request_id) is True

    cancelled = service.get_request(request.request_id)
    assert cancelled.status is RequestStatus.CANCELLED
    assert cancelled.released_at is not None
    assert cancelled.total_charges == 12.0
    assert service.snapshot().available_slots == before + 1
    assert service.free_queue("zone-3")[-1] == request.slot_id
    last = service.operation_log()[-1]
    assert last.kind is OperationKind.CANCEL
    assert last.slot_id == request.slot_id


def test_cancel_after_release_fails(service):
    request = service.allocate("zone-1", "AA11", 1)
    assert service.release(request.request_id)

    assert service.cancel(request.request_id) is False
    assert service.get_request(request.request_id).status is RequestStatus.RELEASED


def test_release_after_cancel_fails(service):
    request = service.allocate("zone-1", "AA11", 1)
    assert service.cancel(request.request_id)

    assert service.release(request.request_id) is False
    assert service.cancel(request.request_id) is False


def test_cancel_unknown_request_fails(service):
    assert service.cancel("missing") is False


def test_active_and_history_listings_follow_status(service):
    kept = service.allocate("zone-1", "AA11", 1)
    released = service.allocate("zone-1", "BB22", 1)
    cancelled = service.allocate("zone-1", "CC33", 1)
    service.release(released.request_id)
    service.cancel(cancelled.request_id)

    assert [item.request_id for item in service.list_active_requests()] == [kept.request_id]
    assert [item.request_id for item in service.list_history_requests()] == [
        released.request_id,
        cancelled.request_id,
    ]

"""Waiting/matched registry contract tests."""

from __future__ import annotations

import threading

import pytest

from rendezvous.rooms.registry import DuplicateRoomIdError
from rendezvous.rooms.registry import MatchedRegistry
from rendezvous.rooms.registry import NoSuchRoomError
from rendezvous.rooms.registry import PositionOutOfRangeError
from rendezvous.rooms.registry import Room
from rendezvous.rooms.registry import WaitingRegistry
from tests.rendezvous_helpers import make_request


def test_register_keeps_arrival_order(alice, bob, carol) -> None:
    """Input: three distinct room ids -> Output: pending() lists them in arrival order."""
    registry = WaitingRegistry()
    registry.register(make_request(30, alice))
    registry.register(make_request(10, bob))
    registry.register(make_request(20, carol))

    assert [request.room_id for request in registry.pending()] == [30, 10, 20]
    assert len(registry) == 3


def test_register_duplicate_room_id_leaves_state_untouched(alice, bob) -> None:
    """Input: same room id twice -> Output: DuplicateRoomIdError, first request kept."""
    registry = WaitingRegistry()
    registry.register(make_request(7, alice))

    with pytest.raises(DuplicateRoomIdError) as exc_info:
        registry.register(make_request(7, bob))

    assert exc_info.value.room_id == 7
    assert registry.pending() == [make_request(7, alice)]


def test_take_matching_removes_exactly_once(alice) -> None:
    """Input: take the same room id twice -> Output: request then None."""
    registry = WaitingRegistry()
    registry.register(make_request(1, alice))

    assert registry.take_matching(1) == make_request(1, alice)
    assert registry.take_matching(1) is None
    assert len(registry) == 0


def test_take_matching_unknown_room_has_no_side_effect(alice) -> None:
    registry = WaitingRegistry()
    registry.register(make_request(1, alice))

    assert registry.take_matching(2) is None
    assert registry.is_waiting(1)


def test_cancel_by_position_removes_that_entry(alice, bob, carol) -> None:
    """Input: cancel(1) over [a, b, c] -> Output: b removed, order of the rest kept."""
    registry = WaitingRegistry()
    registry.register(make_request(1, alice))
    registry.register(make_request(2, bob))
    registry.register(make_request(3, carol))

    removed = registry.cancel(1)

    assert removed.room_id == 2
    assert [request.room_id for request in registry.pending()] == [1, 3]


@pytest.mark.parametrize("position", [-1, 2, 99])
def test_cancel_out_of_range_raises(alice, bob, position: int) -> None:
    registry = WaitingRegistry()
    registry.register(make_request(1, alice))
    registry.register(make_request(2, bob))

    with pytest.raises(PositionOutOfRangeError) as exc_info:
        registry.cancel(position)

    assert exc_info.value.size == 2
    assert len(registry) == 2


def test_cancel_room_by_id(alice) -> None:
    registry = WaitingRegistry()
    registry.register(make_request(5, alice))

    assert registry.cancel_room(5).user == alice
    with pytest.raises(NoSuchRoomError):
        registry.cancel_room(5)


def test_room_id_is_free_again_after_removal(alice, bob) -> None:
    registry = WaitingRegistry()
    registry.register(make_request(9, alice))
    registry.take_matching(9)

    registry.register(make_request(9, bob))

    assert registry.pending() == [make_request(9, bob)]


def test_lock_is_released_after_failed_operation(alice) -> None:
    """A raising operation must not leave the registry lock held for other threads."""
    registry = WaitingRegistry()
    registry.register(make_request(1, alice))
    with pytest.raises(DuplicateRoomIdError):
        registry.register(make_request(1, alice))

    acquired: list[bool] = []

    def _try_lock() -> None:
        ok = registry._lock.acquire(timeout=1)
        acquired.append(ok)
        if ok:
            registry._lock.release()

    worker = threading.Thread(target=_try_lock)
    worker.start()
    worker.join(timeout=2)

    assert acquired == [True]


def test_matched_registry_is_append_only(alice, bob, carol) -> None:
    registry = MatchedRegistry()
    first = Room(id=1, first=alice, second=bob)
    second = Room(id=1, first=carol, second=alice)

    registry.record(first)
    snapshot = registry.rooms()
    registry.record(second)

    assert snapshot == [first]
    assert registry.rooms() == [first, second]
    assert len(registry) == 2

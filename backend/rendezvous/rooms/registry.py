"""In-memory waiting/matched registries for room rendezvous."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from itertools import islice
import threading

from rendezvous.rooms.models import RoomRequest
from rendezvous.rooms.models import User


class RoomError(Exception):
    """Base class for room-domain errors."""


class DuplicateRoomIdError(RoomError):
    """Raised when a waiting request already exists for the room id."""

    def __init__(self, room_id: int) -> None:
        super().__init__(f"room_id={room_id} already has a waiting request")
        self.room_id = room_id


class NoSuchRoomError(RoomError):
    """Raised when no waiting request exists for the room id."""

    def __init__(self, room_id: int) -> None:
        super().__init__(f"room_id={room_id} has no waiting request")
        self.room_id = room_id


class PositionOutOfRangeError(RoomError):
    """Raised when a positional cancel points past the waiting list."""

    def __init__(self, position: int, size: int) -> None:
        super().__init__(f"position={position} out of range for {size} waiting request(s)")
        self.position = position
        self.size = size


@dataclass(frozen=True, slots=True)
class Room:
    """Confirmed pairing: ``first`` waited, ``second`` entered."""

    id: int
    first: User
    second: User


class WaitingRegistry:
    """Pending requests in arrival order, at most one per room id."""

    def __init__(self) -> None:
        self._requests: dict[int, RoomRequest] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._requests)

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the registry lock so callers can compose several operations."""
        with self._lock:
            yield

    def register(self, request: RoomRequest) -> None:
        with self._lock:
            if request.room_id in self._requests:
                raise DuplicateRoomIdError(request.room_id)
            self._requests[request.room_id] = request

    def take_matching(self, room_id: int) -> RoomRequest | None:
        """Remove and return the waiting request for room_id, if any."""
        with self._lock:
            return self._requests.pop(room_id, None)

    def cancel(self, position: int) -> RoomRequest:
        """Remove the request at a zero-based position in arrival order.

        Positions shift whenever another request is added or removed, so a
        position read earlier may name a different request by now.
        """
        with self._lock:
            size = len(self._requests)
            if position < 0 or position >= size:
                raise PositionOutOfRangeError(position, size)
            room_id = next(islice(self._requests, position, None))
            return self._requests.pop(room_id)

    def cancel_room(self, room_id: int) -> RoomRequest:
        with self._lock:
            request = self._requests.pop(room_id, None)
            if request is None:
                raise NoSuchRoomError(room_id)
            return request

    def is_waiting(self, room_id: int) -> bool:
        with self._lock:
            return room_id in self._requests

    def pending(self) -> list[RoomRequest]:
        """Return a snapshot of waiting requests in arrival order."""
        with self._lock:
            return list(self._requests.values())


class MatchedRegistry:
    """Append-only audit record of matched rooms."""

    def __init__(self) -> None:
        self._rooms: list[Room] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def record(self, room: Room) -> None:
        with self._lock:
            self._rooms.append(room)

    def rooms(self) -> list[Room]:
        with self._lock:
            return list(self._rooms)


__all__ = [
    "DuplicateRoomIdError",
    "MatchedRegistry",
    "NoSuchRoomError",
    "PositionOutOfRangeError",
    "Room",
    "RoomError",
    "WaitingRegistry",
]

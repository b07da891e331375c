"""Room rendezvous domain package."""

from rendezvous.rooms.models import RoomRequest
from rendezvous.rooms.models import User
from rendezvous.rooms.registry import DuplicateRoomIdError
from rendezvous.rooms.registry import MatchedRegistry
from rendezvous.rooms.registry import NoSuchRoomError
from rendezvous.rooms.registry import PositionOutOfRangeError
from rendezvous.rooms.registry import Room
from rendezvous.rooms.registry import RoomError
from rendezvous.rooms.registry import WaitingRegistry

__all__ = [
    "DuplicateRoomIdError",
    "MatchedRegistry",
    "NoSuchRoomError",
    "PositionOutOfRangeError",
    "Room",
    "RoomError",
    "RoomRequest",
    "User",
    "WaitingRegistry",
]

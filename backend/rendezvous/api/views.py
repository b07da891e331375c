"""Response builders for the rendezvous routes.

Outcome bodies are tagged objects: ``{"Ok": {"message", "user"}}`` on
success and ``{"Err": message}`` for recoverable refusals.
"""

from __future__ import annotations

from typing import Any

from rendezvous.rooms.models import RoomRequest
from rendezvous.rooms.models import User
from rendezvous.rooms.registry import Room

CREATED_MESSAGE = "waiting room created"
DUPLICATE_ROOM_MESSAGE = "a waiting room with this id already exists"
ENTERED_MESSAGE = "entered the room"
NO_SUCH_ROOM_MESSAGE = "there is no room to enter"


def user_view(user: User) -> dict[str, Any]:
    return user.model_dump(mode="json", by_alias=True)


def ok_result(message: str, user: User | None = None) -> dict[str, Any]:
    return {"Ok": {"message": message, "user": None if user is None else user_view(user)}}


def err_result(message: str) -> dict[str, Any]:
    return {"Err": message}


def room_request_view(request: RoomRequest) -> dict[str, Any]:
    return {"room_id": request.room_id, "user": user_view(request.user)}


def room_view(room: Room) -> dict[str, Any]:
    return {"id": room.id, "first": user_view(room.first), "second": user_view(room.second)}

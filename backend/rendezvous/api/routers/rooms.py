"""Rendezvous REST routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Response

from rendezvous.api.deps import get_matching_service
from rendezvous.api.errors import raise_api_error
from rendezvous.api.views import CREATED_MESSAGE
from rendezvous.api.views import DUPLICATE_ROOM_MESSAGE
from rendezvous.api.views import ENTERED_MESSAGE
from rendezvous.api.views import NO_SUCH_ROOM_MESSAGE
from rendezvous.api.views import err_result
from rendezvous.api.views import ok_result
from rendezvous.api.views import room_request_view
from rendezvous.api.views import room_view
from rendezvous.rooms.models import RoomRequest
from rendezvous.rooms.registry import DuplicateRoomIdError
from rendezvous.rooms.registry import NoSuchRoomError
from rendezvous.rooms.registry import PositionOutOfRangeError
from rendezvous.rooms.service import MatchingService

router = APIRouter()


@router.post("/create")
def create_room(
    payload: RoomRequest,
    service: MatchingService = Depends(get_matching_service),
) -> dict[str, Any]:
    """Register a waiting request for payload.room_id."""
    try:
        service.create(payload)
    except DuplicateRoomIdError:
        return err_result(DUPLICATE_ROOM_MESSAGE)
    return ok_result(CREATED_MESSAGE)


@router.post("/enter")
def enter_room(
    payload: RoomRequest,
    service: MatchingService = Depends(get_matching_service),
) -> dict[str, Any]:
    """Pair with the waiting request and return the waiting user's profile."""
    try:
        result = service.enter(payload)
    except NoSuchRoomError:
        return err_result(NO_SUCH_ROOM_MESSAGE)
    return ok_result(ENTERED_MESSAGE, user=result.peer)


@router.post("/cancel/{position}")
@router.post("/delete/room/{position}")
def cancel_waiting(
    position: int,
    service: MatchingService = Depends(get_matching_service),
) -> Response:
    """Remove the waiting request at a zero-based position."""
    try:
        service.cancel(position)
    except PositionOutOfRangeError as exc:
        raise_api_error(
            status_code=404,
            code="WAITING_POSITION_OUT_OF_RANGE",
            message="no waiting request at this position",
            detail={"position": position, "waiting_count": exc.size},
        )
    return Response(status_code=200)


@router.post("/cancel/room/{room_id}")
def cancel_waiting_room(
    room_id: int,
    service: MatchingService = Depends(get_matching_service),
) -> Response:
    """Remove the waiting request for room_id."""
    try:
        service.cancel_room(room_id)
    except NoSuchRoomError:
        raise_api_error(
            status_code=404,
            code="ROOM_NOT_FOUND",
            message="no waiting request for this room id",
            detail={"room_id": room_id},
        )
    return Response(status_code=200)


@router.get("/rooms/waiting")
def list_waiting(service: MatchingService = Depends(get_matching_service)) -> list[dict[str, Any]]:
    return [room_request_view(request) for request in service.pending()]


@router.get("/rooms/matched")
def list_matched(service: MatchingService = Depends(get_matching_service)) -> list[dict[str, Any]]:
    return [room_view(room) for room in service.matched_rooms()]

"""Create/enter/cancel orchestration over the waiting and matched registries."""

from __future__ import annotations

from concurrent.futures import Executor
from concurrent.futures import Future
from dataclasses import dataclass
from ipaddress import IPv4Address
import logging

from rendezvous.notify.client import DeliveryFailure
from rendezvous.notify.client import NotificationClient
from rendezvous.rooms.models import RoomRequest
from rendezvous.rooms.models import User
from rendezvous.rooms.registry import MatchedRegistry
from rendezvous.rooms.registry import NoSuchRoomError
from rendezvous.rooms.registry import Room
from rendezvous.rooms.registry import WaitingRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeliveryReport:
    """Outcome of notifying the waiting peer about its match."""

    room_id: int
    target: IPv4Address
    delivered: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Successful enter: the matched room plus its pending delivery outcome."""

    room: Room
    delivery: Future[DeliveryReport]

    @property
    def peer(self) -> User:
        return self.room.first


class MatchingService:
    """Room rendezvous engine shared by every request handler.

    ``enter`` takes the waiting request and records the room under the
    waiting-registry lock, then notifies the waiting peer after the lock is
    released. With no executor the notification runs on the calling thread
    before ``enter`` returns; with one it is submitted there and may still be
    in flight when the caller gets its answer. A failed delivery never undoes
    the match; it shows up in the returned ``DeliveryReport``.
    """

    def __init__(
        self,
        notifier: NotificationClient,
        *,
        waiting: WaitingRegistry | None = None,
        matched: MatchedRegistry | None = None,
        executor: Executor | None = None,
    ) -> None:
        self._notifier = notifier
        self._waiting = waiting if waiting is not None else WaitingRegistry()
        self._matched = matched if matched is not None else MatchedRegistry()
        self._executor = executor

    @property
    def waiting(self) -> WaitingRegistry:
        return self._waiting

    @property
    def matched(self) -> MatchedRegistry:
        return self._matched

    def create(self, request: RoomRequest) -> None:
        self._waiting.register(request)
        logger.info("waiting room_id=%s user=%s", request.room_id, request.user.name)

    def enter(self, request: RoomRequest) -> MatchResult:
        with self._waiting.locked():
            waiting = self._waiting.take_matching(request.room_id)
            if waiting is None:
                logger.info("enter miss room_id=%s user=%s", request.room_id, request.user.name)
                raise NoSuchRoomError(request.room_id)
            room = Room(id=request.room_id, first=waiting.user, second=request.user)
            self._matched.record(room)

        logger.info(
            "matched room_id=%s first=%s second=%s",
            room.id,
            room.first.name,
            room.second.name,
        )
        return MatchResult(room=room, delivery=self._dispatch(room))

    def cancel(self, position: int) -> RoomRequest:
        request = self._waiting.cancel(position)
        logger.info("cancelled position=%s room_id=%s", position, request.room_id)
        return request

    def cancel_room(self, room_id: int) -> RoomRequest:
        request = self._waiting.cancel_room(room_id)
        logger.info("cancelled room_id=%s", room_id)
        return request

    def pending(self) -> list[RoomRequest]:
        return self._waiting.pending()

    def matched_rooms(self) -> list[Room]:
        return self._matched.rooms()

    def close(self) -> None:
        """Wait for in-flight notifications and stop the executor, if any."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)

    def _dispatch(self, room: Room) -> Future[DeliveryReport]:
        if self._executor is not None:
            return self._executor.submit(self._deliver, room)
        future: Future[DeliveryReport] = Future()
        future.set_result(self._deliver(room))
        return future

    def _deliver(self, room: Room) -> DeliveryReport:
        target = room.first.address
        try:
            self._notifier.notify(target, room.second)
        except DeliveryFailure as exc:
            logger.warning("notification for room_id=%s not delivered: %s", room.id, exc)
            return DeliveryReport(room_id=room.id, target=target, delivered=False, error=str(exc))
        except Exception as exc:
            logger.warning(
                "notification for room_id=%s failed unexpectedly", room.id, exc_info=True
            )
            return DeliveryReport(
                room_id=room.id,
                target=target,
                delivered=False,
                error=f"{type(exc).__name__}: {exc}",
            )
        return DeliveryReport(room_id=room.id, target=target, delivered=True)

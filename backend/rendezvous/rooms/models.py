"""Pydantic models for rendezvous requests and participant profiles."""

from __future__ import annotations

from ipaddress import IPv4Address
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_serializer
from pydantic import field_validator

MAX_ROOM_ID = 2**32 - 1


class User(BaseModel):
    """Participant profile exchanged between paired peers.

    On the wire the address is called ``ip``. It is accepted as a dotted
    string or as an array of four octets, the shape older clients send.
    ``delta_seconds`` is a client clock/latency hint passed through as-is.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    address: IPv4Address = Field(alias="ip")
    delta_seconds: float = Field(allow_inf_nan=False)

    @field_validator("name")
    @classmethod
    def require_encodable_name(cls, value: str) -> str:
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError("name must be valid UTF-8 text") from exc
        return value

    @field_validator("address", mode="before")
    @classmethod
    def accept_octets(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            return value
        if len(value) != 4 or not all(
            isinstance(octet, int) and not isinstance(octet, bool) and 0 <= octet <= 255
            for octet in value
        ):
            raise ValueError("ip octets must be four integers in 0..255")
        return ".".join(str(octet) for octet in value)

    @field_serializer("address")
    def serialize_address(self, address: IPv4Address) -> str:
        return str(address)

    def octets(self) -> list[int]:
        return list(self.address.packed)


class RoomRequest(BaseModel):
    """POST /create and POST /enter request body."""

    model_config = ConfigDict(frozen=True)

    room_id: int = Field(ge=0, le=MAX_ROOM_ID)
    user: User

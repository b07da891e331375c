"""Wire encoding for peer notifications.

``length_prefixed`` frames carry a 4-byte big-endian payload length followed
by the canonical JSON form of a :class:`User`, the same serializer the HTTP
API uses. ``legacy_text`` is the unframed text block older peers read until
EOF, with the address spelled out as four octets.
"""

from __future__ import annotations

from decimal import Decimal
import json
import socket
import struct

from rendezvous.rooms.models import User

FRAME_HEADER = struct.Struct(">I")
FRAMINGS = ("length_prefixed", "legacy_text")
FLOAT32 = struct.Struct(">f")


class FrameError(ValueError):
    """Raised when a received frame is truncated or malformed."""


def encode_user_json(user: User) -> bytes:
    return user.model_dump_json(by_alias=True).encode("utf-8")


def format_float32(value: float) -> str:
    """Shortest positional decimal that reads back as the same 32-bit float.

    Matches how older peers print the value: no exponent, no trailing ``.0``.
    """
    try:
        (single,) = FLOAT32.unpack(FLOAT32.pack(value))
    except OverflowError:
        return format(Decimal(repr(value)), "f")
    for precision in range(1, 10):
        text = f"{single:.{precision}g}"
        if FLOAT32.unpack(FLOAT32.pack(float(text)))[0] == single:
            break
    return format(Decimal(text), "f")


def render_legacy_text(user: User) -> str:
    octets = ", ".join(str(octet) for octet in user.octets())
    return (
        "\n{\n"
        f"    \"name\" : {json.dumps(user.name, ensure_ascii=False)},\n"
        f"    \"ip\" : [{octets}],\n"
        f"    \"delta_seconds\" : {format_float32(user.delta_seconds)} \n"
        "}"
    )


def encode_user(user: User, framing: str = "length_prefixed") -> bytes:
    if framing == "length_prefixed":
        body = encode_user_json(user)
        return FRAME_HEADER.pack(len(body)) + body
    if framing == "legacy_text":
        return render_legacy_text(user).encode("utf-8")
    raise ValueError(f"unknown framing: {framing!r}")


def decode_user(body: bytes | str) -> User:
    """Decode a JSON or legacy text payload (both are JSON documents)."""
    return User.model_validate_json(body)


def decode_frame(frame: bytes) -> User:
    if len(frame) < FRAME_HEADER.size:
        raise FrameError("frame shorter than its length header")
    (length,) = FRAME_HEADER.unpack_from(frame)
    body = frame[FRAME_HEADER.size:]
    if len(body) != length:
        raise FrameError(f"frame declares {length} bytes but carries {len(body)}")
    return decode_user(body)


def _recv_exactly(sock: socket.socket, size: int) -> bytes:
    chunks: list[bytes] = []
    remaining = size
    while remaining:
        chunk = sock.recv(remaining)
        if not chunk:
            raise FrameError(f"connection closed with {remaining} byte(s) missing")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_frame(sock: socket.socket) -> User:
    """Read one length-prefixed User from a connected socket."""
    (length,) = FRAME_HEADER.unpack(_recv_exactly(sock, FRAME_HEADER.size))
    return decode_user(_recv_exactly(sock, length))

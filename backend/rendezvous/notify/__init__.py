"""Peer notification side channel."""

from rendezvous.notify.client import DeliveryFailure
from rendezvous.notify.client import NotificationClient
from rendezvous.notify.codec import FrameError
from rendezvous.notify.codec import decode_frame
from rendezvous.notify.codec import decode_user
from rendezvous.notify.codec import encode_user
from rendezvous.notify.codec import read_frame

__all__ = [
    "DeliveryFailure",
    "FrameError",
    "NotificationClient",
    "decode_frame",
    "decode_user",
    "encode_user",
    "read_frame",
]

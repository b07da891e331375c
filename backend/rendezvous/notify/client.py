"""Outbound TCP notification to the waiting peer."""

from __future__ import annotations

from ipaddress import IPv4Address
import logging
import socket

from rendezvous.core.config import DEFAULT_NOTIFY_PORT
from rendezvous.core.config import Settings
from rendezvous.notify.codec import FRAMINGS
from rendezvous.notify.codec import encode_user
from rendezvous.rooms.models import User

logger = logging.getLogger(__name__)


class DeliveryFailure(Exception):
    """Raised when the notification could not be written to the peer."""

    def __init__(self, target: str, port: int, reason: str) -> None:
        super().__init__(f"delivery to {target}:{port} failed: {reason}")
        self.target = target
        self.port = port
        self.reason = reason


class NotificationClient:
    """Open a short-lived connection, write one User payload, close."""

    def __init__(
        self,
        *,
        port: int = DEFAULT_NOTIFY_PORT,
        connect_timeout: float = 3.0,
        write_timeout: float = 3.0,
        framing: str = "length_prefixed",
    ) -> None:
        if framing not in FRAMINGS:
            raise ValueError(f"unknown framing: {framing!r}")
        self.port = port
        self.connect_timeout = connect_timeout
        self.write_timeout = write_timeout
        self.framing = framing

    @classmethod
    def from_settings(cls, settings: Settings) -> "NotificationClient":
        return cls(
            port=settings.rdv_notify_port,
            connect_timeout=settings.rdv_notify_connect_timeout_seconds,
            write_timeout=settings.rdv_notify_write_timeout_seconds,
            framing=settings.rdv_notify_framing,
        )

    def notify(self, target: IPv4Address | str, payload: User) -> None:
        host = str(target)
        data = encode_user(payload, framing=self.framing)
        try:
            with socket.create_connection((host, self.port), timeout=self.connect_timeout) as sock:
                sock.settimeout(self.write_timeout)
                sock.sendall(data)
        except OSError as exc:
            raise DeliveryFailure(host, self.port, str(exc) or type(exc).__name__) from exc
        logger.debug("notified %s:%s with %d byte(s)", host, self.port, len(data))

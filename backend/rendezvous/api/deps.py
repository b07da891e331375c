"""Dependency helpers shared by API routers."""

from __future__ import annotations

from fastapi import Request

from rendezvous.rooms.service import MatchingService


def get_matching_service(request: Request) -> MatchingService:
    """Return the service instance owned by the running application."""
    return request.app.state.matching_service

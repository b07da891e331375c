"""FastAPI application entrypoint for the rendezvous server."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from rendezvous.api.errors import handle_http_exception
from rendezvous.api.routers.rooms import router as rooms_router
from rendezvous.core.config import Settings
from rendezvous.core.config import load_settings
from rendezvous.core.log import configure_logging
from rendezvous.notify.client import NotificationClient
from rendezvous.rooms.service import MatchingService


def build_matching_service(
    settings: Settings,
    notifier: NotificationClient | None = None,
) -> MatchingService:
    """Wire registries, notifier and dispatch mode from settings."""
    executor = None
    if settings.rdv_notify_mode == "background":
        executor = ThreadPoolExecutor(
            max_workers=settings.rdv_notify_workers,
            thread_name_prefix="rdv-notify",
        )
    return MatchingService(
        notifier if notifier is not None else NotificationClient.from_settings(settings),
        executor=executor,
    )


def create_app(
    settings: Settings | None = None,
    notifier: NotificationClient | None = None,
) -> FastAPI:
    """Build one application instance owning its own MatchingService."""
    resolved = settings if settings is not None else load_settings()
    service = build_matching_service(resolved, notifier)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        configure_logging(resolved)
        yield
        service.close()

    app = FastAPI(lifespan=lifespan)
    app.state.settings = resolved
    app.state.matching_service = service
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.include_router(rooms_router)
    return app


app = create_app()

__all__ = [
    "Settings",
    "app",
    "build_matching_service",
    "create_app",
]

"""Error bodies for rendezvous routes that refuse a request outright."""

from __future__ import annotations

from typing import Any
from typing import NoReturn

from fastapi import HTTPException
from fastapi import Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

ERROR_KEYS = frozenset({"code", "message", "detail"})


def raise_api_error(
    *,
    status_code: int,
    code: str,
    message: str,
    detail: dict[str, Any],
) -> NoReturn:
    """Abort the route with a flat {code,message,detail} body."""
    raise HTTPException(
        status_code=status_code,
        detail={"code": code, "message": message, "detail": detail},
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
    """Pass route error bodies through flat; leave routing errors to FastAPI."""
    if isinstance(exc.detail, dict) and ERROR_KEYS <= set(exc.detail):
        return JSONResponse(status_code=exc.status_code, content=exc.detail, headers=exc.headers)
    return await http_exception_handler(request, exc)

"""Exception handlers: every error leaves the API as {"error": ..., "code": ...}."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cms_auth.services.auth import AuthError

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, code: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "code": code},
        headers=headers,
    )


async def handle_auth_error(request: Request, exc: AuthError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return _error(exc.status_code, exc.message, exc.code, headers)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body", "invalid_request")


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Not found"
    else:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _error(exc.status_code, message, f"http_{exc.status_code}", getattr(exc, "headers", None))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure server-side; the client only learns that something went wrong."""
    logger.exception(
        "CMS auth error",
        extra={"path": request.url.path, "method": request.method},
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "internal")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthError, handle_auth_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

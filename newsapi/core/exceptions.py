"""Custom exceptions and centralized exception handlers."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException


class AppException(Exception):
    """Base application exception with structured error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_ERROR"
    message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.status_code = status_code or self.status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to RFC 7807 problem+json style response."""
        return {
            "error": self.error_code,
            "message": self.message,
            "status": self.status_code,
            **({"details": self.details} if self.details else {}),
        }


class NotFoundError(AppException):
    """Resource not found."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
    message = "Resource not found"


class DatabaseUnavailableError(AppException):
    """Database could not be reached."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "DATABASE_UNAVAILABLE"
    message = "Database temporarily unavailable"


_HTTP_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_503_SERVICE_UNAVAILABLE: "SERVICE_UNAVAILABLE",
}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def register_exception_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request, exc: AppException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers={"X-Request-ID": _request_id(request)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
                "message": str(exc.detail),
                "status": exc.status_code,
            },
            headers={"X-Request-ID": _request_id(request)},
        )

    @app.exception_handler(InterfaceError)
    @app.exception_handler(OperationalError)
    async def database_exception_handler(
        request: Request, exc: DBAPIError
    ) -> JSONResponse:
        import logging

        logger = logging.getLogger("newsapi.error")
        logger.warning(
            f"Database error on {request.method} {request.url.path}: {exc.__class__.__name__}",
            extra={"request_id": _request_id(request), "path": request.url.path},
        )
        error = DatabaseUnavailableError()
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_dict(),
            headers={"X-Request-ID": _request_id(request)},
        )

    @app.exception_handler(OSError)
    async def connection_exception_handler(
        request: Request, exc: OSError
    ) -> JSONResponse:
        # asyncpg surfaces connect failures (refused, DNS, timeout) unwrapped
        return await database_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        import logging

        logger = logging.getLogger("newsapi.error")
        logger.exception(
            "Unhandled exception",
            extra={
                "request_id": _request_id(request),
                "path": request.url.path,
                "method": request.method,
            },
        )

        # Don't expose internal error details in production
        from .config import settings

        if settings.debug:
            message = str(exc)
        else:
            message = "An unexpected error occurred"

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "INTERNAL_ERROR",
                "message": message,
                "status": 500,
            },
            headers={"X-Request-ID": _request_id(request)},
        )

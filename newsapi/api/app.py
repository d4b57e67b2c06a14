"""API application factory."""

from __future__ import annotations

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from newsapi.core.config import settings
from newsapi.core.exceptions import register_exception_handlers
from newsapi.core.logging import get_logger, request_id_var
from newsapi.schemas.common import ErrorResponse

from .routes import articles, health


logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - initialize and cleanup resources."""
    from newsapi.database.connection import close_database, init_database

    try:
        await init_database()
    except Exception as e:
        # Keep serving: /health reports the outage and requests answer 503
        logger.warning(f"Database initialization failed: {e}")

    yield

    try:
        await close_database()
    except Exception as e:
        logger.warning(f"Resource cleanup failed: {e}")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add request ID to all requests for tracing."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request_id

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.monotonic()

        response = await call_next(request)

        duration = time.monotonic() - start_time

        # Path only; query strings are not logged
        path = request.url.path

        logger.info(
            f"{request.method} {path} -> {response.status_code} ({duration:.3f}s)",
            extra={
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": int(duration * 1000),
            },
        )

        return response


def create_api_app() -> FastAPI:
    """Create and configure the API application."""
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="News article storage API",
        root_path=settings.root_path,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        responses={
            404: {"model": ErrorResponse, "description": "Not Found"},
            422: {"model": ErrorResponse, "description": "Validation Error"},
            500: {"model": ErrorResponse, "description": "Internal Server Error"},
            503: {"model": ErrorResponse, "description": "Database Unavailable"},
        },
    )

    # Middlewares (first added is innermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        max_age=600,
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(articles.router, prefix="/articles", tags=["Articles"])

    return app

"""Main application entry point."""

from __future__ import annotations

from fastapi import FastAPI

from newsapi.api.app import create_api_app
from newsapi.core.config import settings
from newsapi.core.logging import get_logger, setup_logging


logger = get_logger("main")


def create_app() -> FastAPI:
    """Create the application served by uvicorn."""
    setup_logging()
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    return create_api_app()


app = create_app()


def run() -> None:
    """Console entry point: serve the API on the configured host and port."""
    import uvicorn

    logger.info(f"Server starting at {settings.host}:{settings.port}")
    uvicorn.run(
        "newsapi.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()

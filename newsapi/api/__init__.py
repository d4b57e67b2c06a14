"""API module with routers and the application factory."""

from .app import create_api_app


__all__ = ["create_api_app"]

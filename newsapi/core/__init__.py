"""Core infrastructure: settings, logging, exceptions."""

from .config import Settings, get_settings, settings
from .exceptions import (
    AppException,
    DatabaseUnavailableError,
    NotFoundError,
)
from .logging import get_logger, setup_logging


__all__ = [
    "AppException",
    "DatabaseUnavailableError",
    "NotFoundError",
    "Settings",
    "get_logger",
    "get_settings",
    "settings",
    "setup_logging",
]

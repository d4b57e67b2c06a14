"""Structured logging configuration with request ID tracking."""

from __future__ import annotations

import json
import logging
import re
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .config import settings


# Context variable for request ID tracking
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Attributes present on every LogRecord; anything else came in through `extra=`
_RESERVED_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            log_data["request_id"] = request_id

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add source location in debug mode
        if settings.debug:
            log_data["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter for development and the ops CLI."""

    def format(self, record: logging.LogRecord) -> str:
        request_id = request_id_var.get()
        rid = f"[{request_id[:8]}] " if request_id else ""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        base = f"{timestamp} {record.levelname:8} {rid}{record.name}: {record.getMessage()}"

        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)

        return base


class SensitiveDataFilter(logging.Filter):
    """Filter sensitive data from logs."""

    SENSITIVE_KEYS = {
        "password",
        "secret",
        "token",
        "authorization",
        "database_url",
    }

    # user:password@host inside connection URLs
    _URL_CREDENTIALS = re.compile(r"(\w+://[^:/@\s]+:)[^@\s]+(@)")

    def filter(self, record: logging.LogRecord) -> bool:
        # Redact the rendered message so %-style args are covered too
        text = record.getMessage()
        if "://" in text:
            text = self._URL_CREDENTIALS.sub(r"\1[REDACTED]\2", text)
        lowered = text.lower()
        for key in self.SENSITIVE_KEYS:
            if key in lowered:
                text = self._redact_value(text, key)
        record.msg = text
        record.args = None
        return True

    def _redact_value(self, text: str, key: str) -> str:
        """Redact values after sensitive keys."""
        patterns = [
            rf'({key}\s*[=:]\s*)[^\s,}}\]]+',
            rf"('{key}'\s*:\s*)[^\s,}}\]]+",
            rf'("{key}"\s*:\s*)[^\s,}}\]]+',
        ]
        for pattern in patterns:
            text = re.sub(pattern, r"\1[REDACTED]", text, flags=re.IGNORECASE)
        return text


def setup_logging(log_format: str | None = None) -> None:
    """Configure application logging.

    ``log_format`` overrides ``settings.log_format`` (the ops CLI prefers text).
    """
    level = getattr(logging, settings.log_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if (log_format or settings.log_format) == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(TextFormatter())

    handler.addFilter(SensitiveDataFilter())

    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("docker").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the newsapi prefix."""
    return logging.getLogger(f"newsapi.{name}")

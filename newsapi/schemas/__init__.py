"""Pydantic request/response schemas."""

from .articles import ArticleCreate, ArticleResponse, ArticleUpdate
from .common import ErrorResponse, HealthResponse, MessageResponse


__all__ = [
    "ArticleCreate",
    "ArticleResponse",
    "ArticleUpdate",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
]

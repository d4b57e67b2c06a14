"""Database module: SQLAlchemy async engine, ORM models and session helpers."""

from .connection import (
    close_database,
    close_sqlalchemy_engine,
    create_schema,
    ensure_schema,
    get_async_database_url,
    get_engine,
    get_session,
    get_session_factory,
    init_database,
    init_sqlalchemy_engine,
    ping_database,
)
from .orm import Article, Base


__all__ = [
    "Article",
    "Base",
    "close_database",
    "close_sqlalchemy_engine",
    "create_schema",
    "ensure_schema",
    "get_async_database_url",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_database",
    "init_sqlalchemy_engine",
    "ping_database",
]

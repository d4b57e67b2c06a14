"""Database session dependency injection for FastAPI routes.

Each request gets its own session that is committed on success or rolled
back on error. The session is function-scoped so the commit happens before
the response is sent; a failed commit turns into an error response.

Usage in routes:
    from newsapi.database.session import DbSession

    @router.get("/articles/{article_id}")
    async def get_article(article_id: int, db: DbSession) -> ArticleResponse:
        article = await db.get(Article, article_id)
        ...
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newsapi.database.connection import ensure_schema, get_session_factory


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped database session with auto-commit/rollback."""
    await ensure_schema()
    session_factory = await get_session_factory()

    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# Type alias for dependency injection - use this in route signatures
DbSession = Annotated[AsyncSession, Depends(get_db_session, scope="function")]

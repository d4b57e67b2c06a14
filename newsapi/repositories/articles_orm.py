"""Article repository using SQLAlchemy ORM.

All functions take the caller's session and only flush; committing is left
to the session owner (the request-scoped dependency in API routes).

Usage:
    from newsapi.repositories import articles_orm as article_repo

    async with get_session() as session:
        articles = await article_repo.list_articles(session)
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from newsapi.core.logging import get_logger
from newsapi.database.orm import Article


logger = get_logger("repositories.articles_orm")


async def list_articles(
    session: AsyncSession,
    limit: int | None = None,
    offset: int = 0,
) -> Sequence[Article]:
    """List articles ordered by id."""
    stmt = select(Article).order_by(Article.id)
    if offset:
        stmt = stmt.offset(offset)
    if limit is not None:
        stmt = stmt.limit(limit)
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_article(session: AsyncSession, article_id: int) -> Article | None:
    """Get an article by id."""
    result = await session.execute(select(Article).where(Article.id == article_id))
    return result.scalar_one_or_none()


async def create_article(
    session: AsyncSession,
    title: str,
    content: str,
    source: str,
) -> Article:
    """Insert an article; the database assigns its id."""
    article = Article(title=title, content=content, source=source)
    session.add(article)
    await session.flush()
    logger.info(f"Created article {article.id} from {source}")
    return article


async def update_article(
    session: AsyncSession,
    article_id: int,
    title: str,
    content: str,
    source: str,
) -> Article | None:
    """Replace an article's fields. Returns None if the article does not exist."""
    existing = await get_article(session, article_id)
    if existing is None:
        return None

    existing.title = title
    existing.content = content
    existing.source = source

    await session.flush()
    logger.info(f"Updated article {article_id}")
    return existing


async def delete_article(session: AsyncSession, article_id: int) -> bool:
    """Delete an article. Returns True if a row was removed."""
    result = await session.execute(delete(Article).where(Article.id == article_id))
    deleted = result.rowcount > 0
    if deleted:
        logger.info(f"Deleted article {article_id}")
    return deleted

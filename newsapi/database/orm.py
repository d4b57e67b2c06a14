"""SQLAlchemy ORM models for the news API.

Usage:
    from newsapi.database.orm import Article
    from newsapi.database.connection import get_session

    async with get_session() as session:
        article = await session.get(Article, 1)
        article.title = "Updated"
        await session.commit()
"""

from __future__ import annotations

from sqlalchemy import MetaData, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# Naming convention for constraints and indexes (deterministic names for Alembic)
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all ORM models with naming convention."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class Article(Base):
    """A news article."""
    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    source: Mapped[str] = mapped_column(String, nullable=False)

    def __repr__(self) -> str:
        return f"<Article id={self.id} source={self.source!r}>"

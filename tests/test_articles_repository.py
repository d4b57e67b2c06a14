"""Tests for the article repository against a mocked AsyncSession."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from newsapi.database.orm import Article
from newsapi.repositories import articles_orm as article_repo


def _session_returning(result) -> AsyncMock:
    session = AsyncMock()
    session.add = MagicMock()
    session.execute.return_value = result
    return session


def _scalar_result(value) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestCreateArticle:
    @pytest.mark.asyncio
    async def test_adds_and_flushes(self):
        session = _session_returning(None)

        article = await article_repo.create_article(
            session, title="t", content="c", source="s"
        )

        session.add.assert_called_once_with(article)
        session.flush.assert_awaited_once()
        assert (article.title, article.content, article.source) == ("t", "c", "s")


class TestGetArticle:
    @pytest.mark.asyncio
    async def test_returns_row(self):
        row = Article(id=1, title="t", content="c", source="s")
        session = _session_returning(_scalar_result(row))

        assert await article_repo.get_article(session, 1) is row

    @pytest.mark.asyncio
    async def test_returns_none_when_absent(self):
        session = _session_returning(_scalar_result(None))

        assert await article_repo.get_article(session, 1) is None


class TestUpdateArticle:
    @pytest.mark.asyncio
    async def test_replaces_fields(self):
        row = Article(id=4, title="old", content="old", source="old")
        session = _session_returning(_scalar_result(row))

        updated = await article_repo.update_article(
            session, 4, title="new", content="body", source="src"
        )

        assert updated is row
        assert (row.title, row.content, row.source) == ("new", "body", "src")
        session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_returns_none_without_flush(self):
        session = _session_returning(_scalar_result(None))

        assert await article_repo.update_article(session, 4, "t", "c", "s") is None
        session.flush.assert_not_awaited()


class TestDeleteArticle:
    @pytest.mark.asyncio
    async def test_true_when_row_removed(self):
        result = MagicMock(rowcount=1)
        session = _session_returning(result)

        assert await article_repo.delete_article(session, 1) is True

    @pytest.mark.asyncio
    async def test_false_when_nothing_removed(self):
        result = MagicMock(rowcount=0)
        session = _session_returning(result)

        assert await article_repo.delete_article(session, 1) is False


class TestListArticles:
    @pytest.mark.asyncio
    async def test_orders_by_id_and_applies_paging(self):
        rows = [Article(id=1, title="a", content="", source="s")]
        result = MagicMock()
        result.scalars.return_value.all.return_value = rows
        session = _session_returning(result)

        assert await article_repo.list_articles(session, limit=5, offset=2) == rows

        stmt = session.execute.await_args.args[0]
        sql = str(stmt.compile(compile_kwargs={"literal_binds": True}))
        assert "ORDER BY articles.id" in sql
        assert "LIMIT 5" in sql
        assert "OFFSET 2" in sql

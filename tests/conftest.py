"""Pytest configuration and fixtures."""

from __future__ import annotations

import asyncio
import gc
import warnings
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient


def _force_cleanup():
    """Force cleanup of pending async resources."""
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", category=ResourceWarning)
        gc.collect()


@pytest.fixture(scope="session", autouse=True)
def no_schema_bootstrap():
    """Tests never talk to a real database at startup."""
    from newsapi.core.config import settings

    original = settings.db_create_schema
    settings.db_create_schema = False
    yield
    settings.db_create_schema = original


@pytest.fixture(scope="function", autouse=True)
def reset_engine():
    """Drop any engine created by a previous test so each test starts clean."""
    import newsapi.database.connection as db_conn

    async def _dispose():
        if db_conn._engine is not None:
            await db_conn._engine.dispose()

    try:
        asyncio.run(_dispose())
    except Exception:
        pass
    db_conn._engine = None
    db_conn._session_factory = None
    db_conn._schema_ready = False

    yield

    try:
        asyncio.run(_dispose())
    except Exception:
        pass
    db_conn._engine = None
    db_conn._session_factory = None
    db_conn._schema_ready = False
    _force_cleanup()


# ============================================================================
# In-memory article storage for database-independent API tests
# ============================================================================


class InMemoryArticleRepo:
    """Stands in for newsapi.repositories.articles_orm in API tests."""

    def __init__(self):
        self.rows: dict[int, object] = {}
        self._next_id = 1
        self.error: Exception | None = None

    def _check(self):
        if self.error is not None:
            raise self.error

    async def list_articles(self, session, limit=None, offset=0):
        self._check()
        rows = [self.rows[k] for k in sorted(self.rows)][offset:]
        return rows if limit is None else rows[:limit]

    async def get_article(self, session, article_id):
        self._check()
        return self.rows.get(article_id)

    async def create_article(self, session, title, content, source):
        from newsapi.database.orm import Article

        self._check()
        article = Article(id=self._next_id, title=title, content=content, source=source)
        self.rows[article.id] = article
        self._next_id += 1
        return article

    async def update_article(self, session, article_id, title, content, source):
        self._check()
        article = self.rows.get(article_id)
        if article is None:
            return None
        article.title = title
        article.content = content
        article.source = source
        return article

    async def delete_article(self, session, article_id):
        self._check()
        return self.rows.pop(article_id, None) is not None


@pytest.fixture
def article_repo(monkeypatch) -> InMemoryArticleRepo:
    """Patch the article repository used by the routes with an in-memory one."""
    from newsapi.api.routes import articles as article_routes

    repo = InMemoryArticleRepo()
    for name in (
        "list_articles",
        "get_article",
        "create_article",
        "update_article",
        "delete_article",
    ):
        monkeypatch.setattr(article_routes.article_repo, name, getattr(repo, name))
    return repo


async def _no_db_session():
    yield None


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app with the DB session stubbed out."""
    from newsapi.api.app import create_api_app
    from newsapi.database.session import get_db_session

    app = create_api_app()
    app.dependency_overrides[get_db_session] = _no_db_session
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    _force_cleanup()


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client for the FastAPI app."""
    from newsapi.api.app import create_api_app
    from newsapi.database.session import get_db_session

    app = create_api_app()
    app.dependency_overrides[get_db_session] = _no_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def sample_article() -> dict:
    return {
        "title": "Rust 1.69 released",
        "content": "The Rust team is happy to announce a new version.",
        "source": "blog.rust-lang.org",
    }

"""Article CRUD routes - PostgreSQL async."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from newsapi.core.exceptions import NotFoundError
from newsapi.core.logging import get_logger
from newsapi.database.session import DbSession
from newsapi.repositories import articles_orm as article_repo
from newsapi.schemas.articles import ArticleCreate, ArticleResponse, ArticleUpdate
from newsapi.schemas.common import MessageResponse


logger = get_logger("api.routes.articles")

router = APIRouter()

# ids are PostgreSQL SERIAL (int4)
ArticleId = Annotated[int, Path(ge=-(2**31), le=2**31 - 1, description="Article id")]


def _not_found(article_id: int) -> NotFoundError:
    return NotFoundError(message="Article not found", details={"id": article_id})


@router.get(
    "",
    response_model=list[ArticleResponse],
    summary="List articles",
    description="Return all stored articles ordered by id.",
)
async def list_articles(
    db: DbSession,
    limit: int | None = Query(None, ge=1, le=1000, description="Maximum number of articles"),
    offset: int = Query(0, ge=0, description="Number of articles to skip"),
) -> list[ArticleResponse]:
    articles = await article_repo.list_articles(db, limit=limit, offset=offset)
    return [ArticleResponse.model_validate(a) for a in articles]


@router.post(
    "",
    response_model=ArticleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an article",
)
async def create_article(payload: ArticleCreate, db: DbSession) -> ArticleResponse:
    article = await article_repo.create_article(
        db,
        title=payload.title,
        content=payload.content,
        source=payload.source,
    )
    return ArticleResponse.model_validate(article)


@router.get(
    "/{article_id}",
    response_model=ArticleResponse,
    summary="Get an article",
)
async def get_article(article_id: ArticleId, db: DbSession) -> ArticleResponse:
    article = await article_repo.get_article(db, article_id)
    if article is None:
        raise _not_found(article_id)
    return ArticleResponse.model_validate(article)


@router.put(
    "/{article_id}",
    response_model=ArticleResponse,
    summary="Replace an article",
    description="Overwrite title, content and source of an existing article.",
)
async def update_article(
    article_id: ArticleId,
    payload: ArticleUpdate,
    db: DbSession,
) -> ArticleResponse:
    article = await article_repo.update_article(
        db,
        article_id,
        title=payload.title,
        content=payload.content,
        source=payload.source,
    )
    if article is None:
        raise _not_found(article_id)
    return ArticleResponse.model_validate(article)


@router.delete(
    "/{article_id}",
    response_model=MessageResponse,
    summary="Delete an article",
)
async def delete_article(article_id: ArticleId, db: DbSession) -> MessageResponse:
    deleted = await article_repo.delete_article(db, article_id)
    if not deleted:
        raise _not_found(article_id)
    return MessageResponse(message="Article deleted")

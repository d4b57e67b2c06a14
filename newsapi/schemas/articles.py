"""Article-related schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ArticleBase(BaseModel):
    """Fields shared by article requests and responses."""

    # Clients may echo an article back with its id; unknown keys are dropped.
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., description="Headline", examples=["Rust 1.69 released"])
    content: str = Field(..., description="Article body")
    source: str = Field(
        ...,
        description="Publisher or feed the article came from",
        examples=["blog.rust-lang.org"],
    )


class ArticleWrite(ArticleBase):
    """Request body rules. Stored rows are not held to these on the way out."""

    title: str = Field(
        ...,
        min_length=1,
        description="Headline",
        examples=["Rust 1.69 released"],
    )
    source: str = Field(
        ...,
        min_length=1,
        description="Publisher or feed the article came from",
        examples=["blog.rust-lang.org"],
    )


class ArticleCreate(ArticleWrite):
    """Create article request schema."""

    pass


class ArticleUpdate(ArticleWrite):
    """Update article request schema. Replaces all fields."""

    pass


class ArticleResponse(ArticleBase):
    """Article response schema."""

    id: int = Field(..., description="Database-assigned article id")

    model_config = ConfigDict(from_attributes=True)

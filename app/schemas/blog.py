"""Request/response schemas for blog posts."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import ContentStatus, OptionalText


class BlogPostWrite(BaseModel):
    """Body for creating or replacing a blog post."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    excerpt: OptionalText = None
    featured_image: OptionalText = None
    status: ContentStatus = "draft"
    meta_title: OptionalText = None
    meta_description: OptionalText = None


class BlogPostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title: str
    content: str
    excerpt: str | None
    featured_image: str | None
    author_id: int | None
    author_name: str | None
    status: ContentStatus
    published_at: datetime | None
    meta_title: str | None
    meta_description: str | None
    created_at: datetime | None
    updated_at: datetime | None


class BlogPostList(BaseModel):
    posts: list[BlogPostRead]
    total: int
    limit: int
    offset: int

"""Request/response schemas for page content blocks."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import OptionalText


class PageWrite(BaseModel):
    """content_json must be a JSON object; its shape is up to the page that renders it."""

    content_json: dict[str, Any] | None = None
    markdown_body: OptionalText = None


class PageCreate(PageWrite):
    page_key: str = Field(..., min_length=1, max_length=255)


class PageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    page_key: str
    content_json: dict[str, Any]
    markdown_body: str | None
    updated_by: int | None
    updated_by_name: str | None
    updated_at: datetime | None

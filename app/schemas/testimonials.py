"""Request/response schemas for testimonials."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import OptionalText

Rating = Literal["one", "two", "three", "four", "five"]


class TestimonialWrite(BaseModel):
    author: str = Field(..., min_length=1, max_length=255)
    organization: OptionalText = None
    rating: Rating = "five"
    content: str = Field(..., min_length=1)
    is_active: bool = True
    sort_order: int = 0


class TestimonialRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    author: str
    organization: str | None
    rating: Rating
    content: str
    is_active: bool
    sort_order: int
    created_at: datetime | None
    updated_at: datetime | None

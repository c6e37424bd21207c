"""Request/response schemas for roster members."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import OptionalText

GroupType = Literal["vestry", "music-team", "endowment", "clergy"]

GROUP_TYPES: tuple[str, ...] = ("vestry", "music-team", "endowment", "clergy")


class MemberWrite(BaseModel):
    group_type: GroupType
    name: str = Field(..., min_length=1, max_length=255)
    title: str = Field(..., min_length=1, max_length=255)
    term: OptionalText = None
    image: OptionalText = None
    bio: OptionalText = None
    sort_order: int = 0


class MemberRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    group_type: GroupType
    name: str
    title: str
    term: str | None
    image: str | None
    bio: str | None
    sort_order: int
    created_at: datetime | None
    updated_at: datetime | None

"""Request/response schemas for events."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import ContentStatus, OptionalText

Recurrence = Literal["none", "weekly", "monthly", "yearly"]


class EventWrite(BaseModel):
    """Body for creating or replacing an event. Dates are ISO (YYYY-MM-DD)."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    event_date: date
    event_time: OptionalText = None
    end_date: date | None = None
    end_time: OptionalText = None
    location: OptionalText = None
    image: OptionalText = None
    status: ContentStatus = "draft"
    recurring: Recurrence = "none"
    recurrence_rule: OptionalText = None
    rsvp_link: OptionalText = None
    more_info_link: OptionalText = None
    meta_title: OptionalText = None
    meta_description: OptionalText = None


class EventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title: str
    description: str
    event_date: date
    event_time: str | None
    end_date: date | None
    end_time: str | None
    location: str | None
    image: str | None
    status: ContentStatus
    published_at: datetime | None
    recurring: Recurrence
    recurrence_rule: str | None
    rsvp_link: str | None
    more_info_link: str | None
    meta_title: str | None
    meta_description: str | None
    created_at: datetime | None
    updated_at: datetime | None


class EventList(BaseModel):
    events: list[EventRead]
    total: int
    limit: int
    offset: int

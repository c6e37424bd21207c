"""Event endpoints. Anonymous callers only ever see published events."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.auth import get_current_user, get_optional_user
from app.core.database import get_db
from app.core.errors import ApiError
from app.models import Event
from app.schemas.auth import CurrentUser
from app.schemas.common import ApiResponse, ContentStatus, MessageData, SlugRef, ok
from app.schemas.events import EventList, EventRead, EventWrite
from app.services.content import PUBLISHED, apply_status, unique_slug

router = APIRouter()

_WRITABLE_FIELDS = (
    "title",
    "description",
    "event_date",
    "event_time",
    "end_date",
    "end_time",
    "location",
    "image",
    "recurring",
    "recurrence_rule",
    "rsvp_link",
    "more_info_link",
    "meta_title",
    "meta_description",
)


def _get_for_update(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.id == int(event_id)).first() if event_id.isdigit() else None
    if event is None:
        raise ApiError.not_found("Event not found")
    return event


def _apply(event: Event, body: EventWrite) -> None:
    for field in _WRITABLE_FIELDS:
        setattr(event, field, getattr(body, field))
    apply_status(event, body.status)


@router.get("", response_model=ApiResponse[EventList], response_model_exclude_unset=True)
def list_events(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser | None, Depends(get_optional_user)],
    status_filter: Annotated[ContentStatus | None, Query(alias="status")] = None,
    upcoming: bool = False,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> ApiResponse:
    """
    List events by date, soonest first.

    upcoming=true keeps events dated today or later. The status filter only
    applies to authenticated callers; anonymous callers get published events.
    """
    query = db.query(Event)
    if user is None:
        query = query.filter(Event.status == PUBLISHED)
    elif status_filter is not None:
        query = query.filter(Event.status == status_filter)
    if upcoming:
        query = query.filter(Event.event_date >= date.today())

    total = query.count()
    events = (
        query.order_by(Event.event_date.asc(), Event.id.asc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return ok(
        EventList(
            events=[EventRead.model_validate(e) for e in events],
            total=total,
            limit=limit,
            offset=offset,
        )
    )


@router.post(
    "",
    response_model=ApiResponse[SlugRef],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_event(
    body: EventWrite,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    event = Event(slug=unique_slug(db, Event, body.title, fallback="event"))
    _apply(event, body)
    db.add(event)
    db.commit()
    db.refresh(event)
    return ok(SlugRef(id=event.id, slug=event.slug))


@router.get("/{id_or_slug}", response_model=ApiResponse[EventRead], response_model_exclude_unset=True)
def get_event(
    id_or_slug: str,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser | None, Depends(get_optional_user)],
) -> ApiResponse:
    """Fetch one event by numeric id or slug; drafts are hidden from anonymous callers."""
    if id_or_slug.isdigit():
        event = db.query(Event).filter(Event.id == int(id_or_slug)).first()
    else:
        event = db.query(Event).filter(Event.slug == id_or_slug).first()
    if event is None or (user is None and event.status != PUBLISHED):
        raise ApiError.not_found("Event not found")
    return ok(EventRead.model_validate(event))


@router.put("/{event_id}", response_model=ApiResponse[SlugRef], response_model_exclude_unset=True)
def update_event(
    event_id: str,
    body: EventWrite,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    event = _get_for_update(db, event_id)
    if body.title != event.title:
        event.slug = unique_slug(db, Event, body.title, exclude_id=event.id, fallback="event")
    _apply(event, body)
    db.commit()
    return ok(SlugRef(id=event.id, slug=event.slug))


@router.delete("/{event_id}", response_model=ApiResponse[MessageData], response_model_exclude_unset=True)
def delete_event(
    event_id: str,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    event = _get_for_update(db, event_id)
    db.delete(event)
    db.commit()
    return ok(MessageData(message="Event deleted"))

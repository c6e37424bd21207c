"""Testimonial endpoints; visibility is the is_active flag, not draft/published."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.auth import get_current_user
from app.core.database import get_db
from app.core.errors import ApiError
from app.models import Testimonial
from app.schemas.auth import CurrentUser
from app.schemas.common import ApiResponse, MessageData, ok
from app.schemas.testimonials import TestimonialRead, TestimonialWrite

router = APIRouter()


def _get_or_404(db: Session, testimonial_id: int) -> Testimonial:
    testimonial = db.query(Testimonial).filter(Testimonial.id == testimonial_id).first()
    if testimonial is None:
        raise ApiError.not_found("Testimonial not found")
    return testimonial


@router.get("", response_model=ApiResponse[list[TestimonialRead]], response_model_exclude_unset=True)
def list_testimonials(
    db: Annotated[Session, Depends(get_db)],
    active: bool = False,
) -> ApiResponse:
    """List testimonials by sort_order, newest first within a position; active=true hides inactive ones."""
    query = db.query(Testimonial)
    if active:
        query = query.filter(Testimonial.is_active.is_(True))
    testimonials = query.order_by(
        Testimonial.sort_order.asc(),
        Testimonial.created_at.desc(),
        Testimonial.id.desc(),
    ).all()
    return ok([TestimonialRead.model_validate(t) for t in testimonials])


@router.post(
    "",
    response_model=ApiResponse[TestimonialRead],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_testimonial(
    body: TestimonialWrite,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    testimonial = Testimonial(**body.model_dump())
    db.add(testimonial)
    db.commit()
    db.refresh(testimonial)
    return ok(TestimonialRead.model_validate(testimonial))


@router.get(
    "/{testimonial_id}",
    response_model=ApiResponse[TestimonialRead],
    response_model_exclude_unset=True,
)
def get_testimonial(
    testimonial_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse:
    return ok(TestimonialRead.model_validate(_get_or_404(db, testimonial_id)))


@router.put(
    "/{testimonial_id}",
    response_model=ApiResponse[TestimonialRead],
    response_model_exclude_unset=True,
)
def update_testimonial(
    testimonial_id: int,
    body: TestimonialWrite,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    testimonial = _get_or_404(db, testimonial_id)
    for field, value in body.model_dump().items():
        setattr(testimonial, field, value)
    db.commit()
    db.refresh(testimonial)
    return ok(TestimonialRead.model_validate(testimonial))


@router.delete(
    "/{testimonial_id}",
    response_model=ApiResponse[MessageData],
    response_model_exclude_unset=True,
)
def delete_testimonial(
    testimonial_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    testimonial = _get_or_404(db, testimonial_id)
    db.delete(testimonial)
    db.commit()
    return ok(MessageData(message="Testimonial deleted"))

"""Roster member endpoints, ordered by sort_order then name."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.auth import get_current_user
from app.core.database import get_db
from app.core.errors import ApiError
from app.models import Member
from app.schemas.auth import CurrentUser
from app.schemas.common import ApiResponse, MessageData, ok
from app.schemas.members import GroupType, MemberRead, MemberWrite

router = APIRouter()


def _get_or_404(db: Session, member_id: int) -> Member:
    member = db.query(Member).filter(Member.id == member_id).first()
    if member is None:
        raise ApiError.not_found("Member not found")
    return member


@router.get("", response_model=ApiResponse[list[MemberRead]], response_model_exclude_unset=True)
def list_members(
    db: Annotated[Session, Depends(get_db)],
    group: Annotated[GroupType | None, Query()] = None,
) -> ApiResponse:
    """List members, optionally restricted to one group (?group=vestry)."""
    query = db.query(Member)
    if group is not None:
        query = query.filter(Member.group_type == group)
    members = query.order_by(Member.sort_order.asc(), Member.name.asc()).all()
    return ok([MemberRead.model_validate(m) for m in members])


@router.post(
    "",
    response_model=ApiResponse[MemberRead],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_member(
    body: MemberWrite,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    member = Member(**body.model_dump())
    db.add(member)
    db.commit()
    db.refresh(member)
    return ok(MemberRead.model_validate(member))


@router.get("/{member_id}", response_model=ApiResponse[MemberRead], response_model_exclude_unset=True)
def get_member(
    member_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse:
    return ok(MemberRead.model_validate(_get_or_404(db, member_id)))


@router.put("/{member_id}", response_model=ApiResponse[MemberRead], response_model_exclude_unset=True)
def update_member(
    member_id: int,
    body: MemberWrite,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    member = _get_or_404(db, member_id)
    for field, value in body.model_dump().items():
        setattr(member, field, value)
    db.commit()
    db.refresh(member)
    return ok(MemberRead.model_validate(member))


@router.delete("/{member_id}", response_model=ApiResponse[MessageData], response_model_exclude_unset=True)
def delete_member(
    member_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    member = _get_or_404(db, member_id)
    db.delete(member)
    db.commit()
    return ok(MessageData(message="Member deleted"))

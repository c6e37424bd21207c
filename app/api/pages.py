"""Page content blocks, looked up by page_key."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.auth import get_current_user, require_admin
from app.core.database import get_db
from app.core.errors import ApiError
from app.models import PageContent
from app.schemas.auth import CurrentUser
from app.schemas.common import ApiResponse, MessageData, ok
from app.schemas.pages import PageCreate, PageRead, PageWrite

router = APIRouter()


def _get_by_key(db: Session, page_key: str) -> PageContent | None:
    return db.query(PageContent).filter(PageContent.page_key == page_key).first()


def _write(page: PageContent, body: PageWrite, user: CurrentUser) -> None:
    page.content_json = body.content_json if body.content_json is not None else {}
    page.markdown_body = body.markdown_body
    page.updated_by = user.id


@router.get("", response_model=ApiResponse[list[PageRead]], response_model_exclude_unset=True)
def list_pages(db: Annotated[Session, Depends(get_db)]) -> ApiResponse:
    pages = db.query(PageContent).order_by(PageContent.page_key.asc()).all()
    return ok([PageRead.model_validate(p) for p in pages])


@router.post(
    "",
    response_model=ApiResponse[PageRead],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_page(
    body: PageCreate,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    if _get_by_key(db, body.page_key) is not None:
        raise ApiError("PAGE_EXISTS", "Page with this key already exists", status.HTTP_409_CONFLICT)
    page = PageContent(page_key=body.page_key)
    _write(page, body, user)
    db.add(page)
    db.commit()
    db.refresh(page)
    return ok(PageRead.model_validate(page))


@router.get("/{page_key}", response_model=ApiResponse[PageRead], response_model_exclude_unset=True)
def get_page(
    page_key: str,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse:
    page = _get_by_key(db, page_key)
    if page is None:
        raise ApiError.not_found("Page not found")
    return ok(PageRead.model_validate(page))


@router.put("/{page_key}", response_model=ApiResponse[PageRead], response_model_exclude_unset=True)
def upsert_page(
    page_key: str,
    body: PageWrite,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    """Replace a page's content; a missing key is created (201)."""
    page = _get_by_key(db, page_key)
    if page is None:
        page = PageContent(page_key=page_key)
        db.add(page)
        response.status_code = status.HTTP_201_CREATED
    _write(page, body, user)
    db.commit()
    db.refresh(page)
    return ok(PageRead.model_validate(page))


@router.delete("/{page_key}", response_model=ApiResponse[MessageData], response_model_exclude_unset=True)
def delete_page(
    page_key: str,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> ApiResponse:
    """Delete a page block (admin only)."""
    page = _get_by_key(db, page_key)
    if page is None:
        raise ApiError.not_found("Page not found")
    db.delete(page)
    db.commit()
    return ok(MessageData(message="Page deleted successfully"))

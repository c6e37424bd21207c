"""Blog post endpoints. Anonymous callers only ever see published posts."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.auth import get_current_user, get_optional_user
from app.core.database import get_db
from app.core.errors import ApiError
from app.models import BlogPost
from app.schemas.auth import CurrentUser
from app.schemas.blog import BlogPostList, BlogPostRead, BlogPostWrite
from app.schemas.common import ApiResponse, ContentStatus, MessageData, SlugRef, ok
from app.services.content import PUBLISHED, apply_status, unique_slug

router = APIRouter()


def _get_by_id_or_slug(db: Session, id_or_slug: str) -> BlogPost | None:
    if id_or_slug.isdigit():
        return db.query(BlogPost).filter(BlogPost.id == int(id_or_slug)).first()
    return db.query(BlogPost).filter(BlogPost.slug == id_or_slug).first()


def _get_for_update(db: Session, post_id: str) -> BlogPost:
    post = db.query(BlogPost).filter(BlogPost.id == int(post_id)).first() if post_id.isdigit() else None
    if post is None:
        raise ApiError.not_found("Blog post not found")
    return post


@router.get("", response_model=ApiResponse[BlogPostList], response_model_exclude_unset=True)
def list_posts(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser | None, Depends(get_optional_user)],
    status_filter: Annotated[ContentStatus | None, Query(alias="status")] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> ApiResponse:
    """
    List posts, newest first.

    Authenticated callers see every post and may filter by status; for anonymous
    callers the status filter is ignored and only published posts are returned.
    """
    query = db.query(BlogPost)
    if user is None:
        query = query.filter(BlogPost.status == PUBLISHED)
    elif status_filter is not None:
        query = query.filter(BlogPost.status == status_filter)

    total = query.count()
    posts = (
        query.order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return ok(
        BlogPostList(
            posts=[BlogPostRead.model_validate(p) for p in posts],
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
def create_post(
    body: BlogPostWrite,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    """Create a post authored by the caller; the slug is derived from the title."""
    post = BlogPost(
        slug=unique_slug(db, BlogPost, body.title, fallback="post"),
        title=body.title,
        content=body.content,
        excerpt=body.excerpt,
        featured_image=body.featured_image,
        author_id=user.id,
        meta_title=body.meta_title,
        meta_description=body.meta_description,
    )
    apply_status(post, body.status)
    db.add(post)
    db.commit()
    db.refresh(post)
    return ok(SlugRef(id=post.id, slug=post.slug))


@router.get("/{id_or_slug}", response_model=ApiResponse[BlogPostRead], response_model_exclude_unset=True)
def get_post(
    id_or_slug: str,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser | None, Depends(get_optional_user)],
) -> ApiResponse:
    """Fetch one post by numeric id or slug; drafts are hidden from anonymous callers."""
    post = _get_by_id_or_slug(db, id_or_slug)
    if post is None or (user is None and post.status != PUBLISHED):
        raise ApiError.not_found("Blog post not found")
    return ok(BlogPostRead.model_validate(post))


@router.put("/{post_id}", response_model=ApiResponse[SlugRef], response_model_exclude_unset=True)
def update_post(
    post_id: str,
    body: BlogPostWrite,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    """Replace a post. The slug is re-derived only when the title changes."""
    post = _get_for_update(db, post_id)
    if body.title != post.title:
        post.slug = unique_slug(db, BlogPost, body.title, exclude_id=post.id, fallback="post")
    post.title = body.title
    post.content = body.content
    post.excerpt = body.excerpt
    post.featured_image = body.featured_image
    post.meta_title = body.meta_title
    post.meta_description = body.meta_description
    apply_status(post, body.status)
    db.commit()
    return ok(SlugRef(id=post.id, slug=post.slug))


@router.delete("/{post_id}", response_model=ApiResponse[MessageData], response_model_exclude_unset=True)
def delete_post(
    post_id: str,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    post = _get_for_update(db, post_id)
    db.delete(post)
    db.commit()
    return ok(MessageData(message="Blog post deleted"))

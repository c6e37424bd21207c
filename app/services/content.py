"""Slug derivation and publication rules shared by blog posts and events."""

import re
import time
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from app.models.base import Base

_STRIP_PUNCTUATION = re.compile(r"[^\w\s-]", re.UNICODE)
_WHITESPACE = re.compile(r"\s")

PUBLISHED = "published"


def slugify(title: str) -> str:
    """Lower-case, drop punctuation, and join words with hyphens ("Sunday Service!" -> "sunday-service")."""
    cleaned = _STRIP_PUNCTUATION.sub("", title.strip().lower())
    return _WHITESPACE.sub("-", cleaned)


def unique_slug(
    db: Session,
    model: type[Base],
    title: str,
    exclude_id: int | None = None,
    fallback: str = "untitled",
) -> str:
    """
    Slug for title that is not used by another row of model.

    On collision a millisecond timestamp is appended instead of scanning numeric suffixes.
    Check-then-insert is not atomic; the unique index on slug is the backstop.
    """
    slug = slugify(title) or fallback
    query = db.query(model.id).filter(model.slug == slug)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    if query.first() is not None:
        slug = f"{slug}-{int(time.time() * 1000)}"
    return slug


def apply_status(entity: Base, status: str) -> None:
    """Set status; published_at is stamped only on the first transition into published."""
    entity.status = status
    if status == PUBLISHED and entity.published_at is None:
        entity.published_at = datetime.now(UTC)

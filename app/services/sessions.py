"""
Server-side refresh-token sessions: create, rotate, look up and delete.

Rotation updates the single session row in place, so the previous refresh token
stops matching the moment a new one is stored. Concurrent use of a stale token is
not detected (last writer wins), and expired rows are never swept; lookups filter
them out by expires_at.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from app.models import AuthSession

logger = logging.getLogger(__name__)


def create_session(
    db: Session,
    user_id: int,
    refresh_token: str,
    expires_at: datetime,
) -> AuthSession:
    """Persist a new session for a freshly issued refresh token."""
    session = AuthSession(
        user_id=user_id,
        refresh_token=refresh_token,
        expires_at=expires_at,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info("Session created", extra={"user_id": user_id, "session_id": session.id})
    return session


def rotate_session(
    db: Session,
    session_id: int,
    new_refresh_token: str,
    new_expires_at: datetime,
) -> bool:
    """Replace the session's refresh token and push its expiry forward. Returns False if the row is gone."""
    updated = (
        db.query(AuthSession)
        .filter(AuthSession.id == session_id)
        .update(
            {
                AuthSession.refresh_token: new_refresh_token,
                AuthSession.expires_at: new_expires_at,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return updated > 0


def find_session_by_token(db: Session, refresh_token: str) -> AuthSession | None:
    """Return the live (not yet expired) session holding this refresh token, or None."""
    return (
        db.query(AuthSession)
        .filter(
            AuthSession.refresh_token == refresh_token,
            AuthSession.expires_at > datetime.now(UTC),
        )
        .first()
    )


def delete_session_by_token(db: Session, refresh_token: str) -> int:
    """Delete the session holding this refresh token (logout). Returns rows removed."""
    deleted = (
        db.query(AuthSession)
        .filter(AuthSession.refresh_token == refresh_token)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted

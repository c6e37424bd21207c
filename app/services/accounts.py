"""User invitation and activation."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from app.core.security import generate_invite_token, invite_expiry
from app.models import User

logger = logging.getLogger(__name__)


class UserExistsError(Exception):
    """Raised when inviting an email that already belongs to an active user."""

    def __init__(self, email: str) -> None:
        self.message = "User with this email already exists"
        self.email = email
        super().__init__(self.message)


def invite_user(db: Session, email: str, name: str, role: str) -> tuple[User, bool]:
    """
    Create an inactive user with a fresh invite token, or re-issue the token for a
    user who has not accepted yet. Returns (user, created).
    """
    email = email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if user is not None and user.is_active:
        raise UserExistsError(email)

    created = user is None
    if created:
        user = User(email=email, is_active=False)
        db.add(user)
    user.name = name
    user.role = role
    user.invite_token = generate_invite_token()
    user.invite_expires_at = invite_expiry()
    db.commit()
    db.refresh(user)
    logger.info(
        "User invited",
        extra={"user_id": user.id, "role": role, "resent": not created},
    )
    return user, created


def find_pending_invite(db: Session, token: str) -> User | None:
    """Return the user whose unexpired invite token matches exactly, or None."""
    return (
        db.query(User)
        .filter(
            User.invite_token == token,
            User.invite_expires_at > datetime.now(UTC),
        )
        .first()
    )


def activate_user(db: Session, user: User, password_hash: str) -> User:
    """Redeem the invite: set the password, activate, and clear the single-use token."""
    user.password_hash = password_hash
    user.is_active = True
    user.invite_token = None
    user.invite_expires_at = None
    db.commit()
    db.refresh(user)
    logger.info("User activated", extra={"user_id": user.id})
    return user

"""ORM model for CMS users (admins and editors)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from app.models.base import Base, created_at_column, updated_at_column


class User(Base):
    """
    Account that can sign in to the admin UI.

    Created inactive with an invite token by an admin; activated once when the invite
    is redeemed (password set, token cleared). role: 'admin' or 'editor'.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=True)
    name = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="editor")
    invite_token = Column(String(64), nullable=True, index=True)
    invite_expires_at = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, nullable=False, default=False)
    created_at = created_at_column()
    updated_at = updated_at_column()

"""ORM model for server-side refresh-token sessions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from app.models.base import Base, created_at_column


class AuthSession(Base):
    """
    One refresh-token lineage. refresh_token holds the current value and is replaced
    in place on every rotation; the row is deleted on logout.
    """

    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    refresh_token = Column(String(512), nullable=False, unique=True, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = created_at_column()

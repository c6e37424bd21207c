"""ORM model for committee and clergy roster entries."""

from sqlalchemy import Column, Integer, String, Text

from app.models.base import Base, created_at_column, updated_at_column


class Member(Base):
    """group_type: 'vestry', 'music-team', 'endowment' or 'clergy'."""

    __tablename__ = "members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    group_type = Column(String(32), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    title = Column(String(255), nullable=False)
    term = Column(String(255), nullable=True)
    image = Column(String(1024), nullable=True)
    bio = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = created_at_column()
    updated_at = updated_at_column()

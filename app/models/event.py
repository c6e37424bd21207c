"""ORM model for calendar events."""

from sqlalchemy import Column, Date, DateTime, Integer, String, Text

from app.models.base import Base, created_at_column, updated_at_column


class Event(Base):
    """Dated event; recurring is one of none, weekly, monthly, yearly."""

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    event_date = Column(Date, nullable=False, index=True)
    event_time = Column(String(16), nullable=True)
    end_date = Column(Date, nullable=True)
    end_time = Column(String(16), nullable=True)
    location = Column(String(512), nullable=True)
    image = Column(String(1024), nullable=True)
    status = Column(String(16), nullable=False, default="draft", index=True)
    published_at = Column(DateTime(timezone=True), nullable=True)
    recurring = Column(String(16), nullable=False, default="none")
    recurrence_rule = Column(String(512), nullable=True)
    rsvp_link = Column(String(1024), nullable=True)
    more_info_link = Column(String(1024), nullable=True)
    meta_title = Column(String(255), nullable=True)
    meta_description = Column(Text, nullable=True)
    created_at = created_at_column()
    updated_at = updated_at_column()

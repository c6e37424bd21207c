"""ORM model for testimonials shown on the public site."""

from sqlalchemy import Boolean, Column, Integer, String, Text

from app.models.base import Base, created_at_column, updated_at_column


class Testimonial(Base):
    """rating is word-valued ('one'..'five'); is_active controls visibility."""

    __tablename__ = "testimonials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    author = Column(String(255), nullable=False)
    organization = Column(String(255), nullable=True)
    rating = Column(String(8), nullable=False, default="five")
    content = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = created_at_column()
    updated_at = updated_at_column()

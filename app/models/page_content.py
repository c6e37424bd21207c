"""ORM model for keyed page content blocks."""

from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.models.base import Base, updated_at_column


class PageContent(Base):
    """
    Free-form content block looked up by page_key.

    content_json is an opaque JSON object whose shape depends on the page;
    markdown_body is optional long-form text.
    """

    __tablename__ = "page_content"

    id = Column(Integer, primary_key=True, autoincrement=True)
    page_key = Column(String(255), nullable=False, unique=True, index=True)
    content_json = Column(JSON, nullable=False, default=dict)
    markdown_body = Column(Text, nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    updated_at = updated_at_column()

    updater = relationship("User", lazy="joined")

    @property
    def updated_by_name(self) -> str | None:
        return self.updater.name if self.updater is not None else None

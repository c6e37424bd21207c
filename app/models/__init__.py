"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.blog_post import BlogPost
from app.models.event import Event
from app.models.member import Member
from app.models.page_content import PageContent
from app.models.session import AuthSession
from app.models.testimonial import Testimonial
from app.models.user import User

__all__ = [
    "AuthSession",
    "Base",
    "BlogPost",
    "Event",
    "Member",
    "PageContent",
    "Testimonial",
    "User",
]

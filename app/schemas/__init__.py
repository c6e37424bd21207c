"""Pydantic request/response schemas."""

from app.schemas.auth import CurrentUser, UserSummary
from app.schemas.blog import BlogPostList, BlogPostRead, BlogPostWrite
from app.schemas.common import ApiResponse, ErrorBody, MessageData, SlugRef, ok
from app.schemas.events import EventList, EventRead, EventWrite
from app.schemas.health import HealthResponse
from app.schemas.members import MemberRead, MemberWrite
from app.schemas.pages import PageCreate, PageRead, PageWrite
from app.schemas.testimonials import TestimonialRead, TestimonialWrite
from app.schemas.upload import UploadData

__all__ = [
    "ApiResponse",
    "BlogPostList",
    "BlogPostRead",
    "BlogPostWrite",
    "CurrentUser",
    "ErrorBody",
    "EventList",
    "EventRead",
    "EventWrite",
    "HealthResponse",
    "MemberRead",
    "MemberWrite",
    "MessageData",
    "PageCreate",
    "PageRead",
    "PageWrite",
    "SlugRef",
    "TestimonialRead",
    "TestimonialWrite",
    "UploadData",
    "UserSummary",
    "ok",
]

"""Shared schema building blocks: the response envelope and reusable field types."""

from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import BaseModel, BeforeValidator

T = TypeVar("T")

ContentStatus = Literal["draft", "published"]


def _blank_to_none(value: Any) -> Any:
    """Treat empty strings from form inputs as missing."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]


class ErrorBody(BaseModel):
    code: str
    message: str


class ApiResponse(BaseModel, Generic[T]):
    """Uniform envelope: {success, data?, error?}."""

    success: bool
    data: T | None = None
    error: ErrorBody | None = None


class MessageData(BaseModel):
    message: str


class SlugRef(BaseModel):
    """Identifiers returned after creating or updating a slugged entity."""

    id: int
    slug: str


def ok(data: Any) -> ApiResponse:
    """Wrap data in a success envelope (fields explicitly set so they survive exclude_unset)."""
    return ApiResponse(success=True, data=data)

"""Request/response schemas for auth endpoints."""

import re
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

UserRole = Literal["admin", "editor"]

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(value: str) -> str:
    return value.strip().lower()


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, max_length=256, description="Password")

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)


class CurrentUser(BaseModel):
    """Authenticated identity (from the access token) attached to the request."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: UserRole


class UserSummary(BaseModel):
    """User fields safe to return to the client (no hash, no invite token)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: UserRole


class TokenData(BaseModel):
    """Returned by login and refresh; the same access token is also set as a cookie."""

    model_config = ConfigDict(populate_by_name=True)

    user: UserSummary
    access_token: str = Field(..., alias="accessToken")


class MeData(BaseModel):
    user: CurrentUser


class InviteRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = "editor"

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        email = normalize_email(v)
        if not EMAIL_PATTERN.match(email):
            raise ValueError("Invalid email format")
        return email

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        name = v.strip()
        if not name:
            raise ValueError("Name is required")
        return name


class InviteData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    invite_url: str = Field(..., alias="inviteUrl")
    user_id: int | None = Field(default=None, alias="userId")


class InviteInfo(BaseModel):
    """Pending invite details shown on the accept-invite page."""

    email: str
    name: str


class AcceptInviteRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=128)
    password: str = Field(..., min_length=1, max_length=256)


class AcceptInviteData(BaseModel):
    message: str
    user: UserSummary


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: UserRole
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

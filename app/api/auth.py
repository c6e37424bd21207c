"""Login, token refresh, logout, invitations, and auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.cookies import REFRESH_COOKIE, clear_auth_cookies, set_auth_cookies
from app.core.database import get_db
from app.core.errors import ApiError
from app.core.security import (
    InvalidTokenError,
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    hash_password,
    refresh_token_expiry,
    validate_password_strength,
    verify_password,
)
from app.models import User
from app.schemas.auth import (
    AcceptInviteData,
    AcceptInviteRequest,
    CurrentUser,
    InviteData,
    InviteInfo,
    InviteRequest,
    LoginRequest,
    MeData,
    TokenData,
    UserListItem,
    UserSummary,
)
from app.schemas.common import ApiResponse, MessageData, ok
from app.services.accounts import (
    UserExistsError,
    activate_user,
    find_pending_invite,
    invite_user,
)
from app.services.sessions import (
    create_session,
    delete_session_by_token,
    find_session_by_token,
    rotate_session,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def get_optional_user(request: Request) -> CurrentUser | None:
    """Dependency: identity attached by the auth gate, or None for anonymous callers."""
    return getattr(request.state, "user", None)


def get_current_user(
    user: Annotated[CurrentUser | None, Depends(get_optional_user)],
) -> CurrentUser:
    """Dependency: require an authenticated caller. Raises 401 otherwise."""
    if user is None:
        raise ApiError.unauthorized("Not authenticated")
    return user


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for editors."""
    if current_user.role != "admin":
        raise ApiError.forbidden("Admin access required")
    return current_user


def _issue_tokens(response: Response, user: User) -> tuple[str, str]:
    access_token = create_access_token(user.id, user.email, user.name, user.role)
    refresh_token = create_refresh_token(user.id)
    set_auth_cookies(response, access_token, refresh_token)
    return access_token, refresh_token


def _invite_url(token: str) -> str:
    return f"{settings.SITE_URL}/admin/accept-invite?token={token}"


@router.post("/login", response_model=ApiResponse[TokenData], response_model_exclude_unset=True)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse:
    """
    Authenticate with email and password.

    Sets the auth_token (15 min) and refresh_token (7 days) cookies and returns the
    access token for callers that prefer the Authorization: Bearer header.
    """
    user = (
        db.query(User)
        .filter(User.email == body.email, User.is_active.is_(True))
        .first()
    )
    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("Login failed", extra={"reason": "invalid_credentials"})
        raise ApiError(
            "INVALID_CREDENTIALS",
            "Invalid email or password",
            status.HTTP_401_UNAUTHORIZED,
        )

    access_token, refresh_token = _issue_tokens(response, user)
    create_session(db, user.id, refresh_token, refresh_token_expiry())
    logger.info("Login succeeded", extra={"user_id": user.id})
    return ok(TokenData(user=UserSummary.model_validate(user), access_token=access_token))


@router.post("/refresh", response_model=ApiResponse[TokenData], response_model_exclude_unset=True)
def refresh(
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse:
    """
    Exchange the refresh cookie for a new access token.

    The session row is rotated in place: the presented refresh token stops working
    and both cookies are replaced. Every failure clears both cookies.
    """
    presented = request.cookies.get(REFRESH_COOKIE)
    if not presented:
        raise ApiError("NO_TOKEN", "No refresh token provided", status.HTTP_401_UNAUTHORIZED)

    try:
        user_id = decode_refresh_token(presented)
    except InvalidTokenError:
        raise ApiError(
            "INVALID_TOKEN",
            "Invalid refresh token",
            status.HTTP_401_UNAUTHORIZED,
            clear_auth_cookies=True,
        )

    session = find_session_by_token(db, presented)
    if session is None:
        raise ApiError(
            "SESSION_EXPIRED",
            "Session expired",
            status.HTTP_401_UNAUTHORIZED,
            clear_auth_cookies=True,
        )

    user = db.query(User).filter(User.id == user_id, User.is_active.is_(True)).first()
    if user is None:
        raise ApiError(
            "USER_NOT_FOUND",
            "User not found",
            status.HTTP_401_UNAUTHORIZED,
            clear_auth_cookies=True,
        )

    access_token = create_access_token(user.id, user.email, user.name, user.role)
    refresh_token = create_refresh_token(user.id)
    # The row can vanish between lookup and rotation (concurrent logout).
    if not rotate_session(db, session.id, refresh_token, refresh_token_expiry()):
        raise ApiError(
            "SESSION_EXPIRED",
            "Session expired",
            status.HTTP_401_UNAUTHORIZED,
            clear_auth_cookies=True,
        )
    set_auth_cookies(response, access_token, refresh_token)
    return ok(TokenData(user=UserSummary.model_validate(user), access_token=access_token))


@router.post("/logout", response_model=ApiResponse[MessageData], response_model_exclude_unset=True)
def logout(
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse:
    """Delete the session and clear cookies. Always succeeds from the caller's point of view."""
    presented = request.cookies.get(REFRESH_COOKIE)
    message = "Logged out successfully"
    if presented:
        try:
            delete_session_by_token(db, presented)
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Session delete failed during logout")
            message = "Logged out"
    clear_auth_cookies(response)
    return ok(MessageData(message=message))


@router.get("/me", response_model=ApiResponse[MeData], response_model_exclude_unset=True)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    """Echo the identity carried by the access token."""
    return ok(MeData(user=current_user))


@router.post("/invite", response_model=ApiResponse[InviteData], response_model_exclude_unset=True)
def invite(
    body: InviteRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> ApiResponse:
    """
    Invite a user by email (admin only).

    A new user is created inactive (201). Re-inviting a user who has not accepted yet
    issues a fresh token (200). The invite URL is returned instead of being emailed.
    """
    try:
        user, created = invite_user(db, body.email, body.name, body.role)
    except UserExistsError as e:
        raise ApiError("USER_EXISTS", e.message, status.HTTP_400_BAD_REQUEST) from e

    invite_url = _invite_url(user.invite_token)
    if created:
        response.status_code = status.HTTP_201_CREATED
        return ok(
            InviteData(message="User invited successfully", invite_url=invite_url, user_id=user.id)
        )
    return ok(InviteData(message="Invite resent", invite_url=invite_url))


@router.get(
    "/invite",
    response_model=ApiResponse[list[UserListItem]],
    response_model_exclude_unset=True,
)
def list_users(
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> ApiResponse:
    """List all users, newest first (admin only)."""
    users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
    return ok([UserListItem.model_validate(u) for u in users])


@router.get(
    "/accept-invite",
    response_model=ApiResponse[InviteInfo],
    response_model_exclude_unset=True,
)
def check_invite(
    token: Annotated[str, Query(min_length=1, max_length=128)],
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse:
    """Validate a pending invite token for the accept-invite page."""
    user = find_pending_invite(db, token)
    if user is None:
        raise ApiError("INVALID_TOKEN", "Invalid or expired invite token")
    return ok(InviteInfo(email=user.email, name=user.name))


@router.post(
    "/accept-invite",
    response_model=ApiResponse[AcceptInviteData],
    response_model_exclude_unset=True,
)
def accept_invite(
    body: AcceptInviteRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse:
    """Set the password for an invited user, activate the account, and log them in."""
    check = validate_password_strength(body.password)
    if not check.valid:
        raise ApiError("WEAK_PASSWORD", check.reason or "Password is too weak")

    user = find_pending_invite(db, body.token)
    if user is None:
        raise ApiError("INVALID_TOKEN", "Invalid or expired invite token")

    user = activate_user(db, user, hash_password(body.password))
    _, refresh_token = _issue_tokens(response, user)
    create_session(db, user.id, refresh_token, refresh_token_expiry())
    return ok(
        AcceptInviteData(
            message="Account activated successfully",
            user=UserSummary.model_validate(user),
        )
    )

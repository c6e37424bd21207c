"""Auth cookie names and helpers; cookies are the canonical credential transport for the admin UI."""

from starlette.responses import Response

from app.core.config import settings
from app.core.security import ACCESS_TOKEN_TTL, REFRESH_TOKEN_TTL

AUTH_COOKIE = "auth_token"
REFRESH_COOKIE = "refresh_token"


def _set(response: Response, name: str, value: str, max_age: int) -> None:
    response.set_cookie(
        name,
        value,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )


def _delete(response: Response, name: str) -> None:
    response.delete_cookie(
        name,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )


def set_auth_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    _set(response, AUTH_COOKIE, access_token, int(ACCESS_TOKEN_TTL.total_seconds()))
    _set(response, REFRESH_COOKIE, refresh_token, int(REFRESH_TOKEN_TTL.total_seconds()))


def clear_access_cookie(response: Response) -> None:
    _delete(response, AUTH_COOKIE)


def clear_auth_cookies(response: Response) -> None:
    _delete(response, AUTH_COOKIE)
    _delete(response, REFRESH_COOKIE)

"""
Authentication gate: classify every request against a declarative route table,
validate the bearer credential where required, and attach the identity to
request.state for downstream dependencies.

Each request is decided on its own; nothing is shared across requests.
"""

import enum
import logging
from dataclasses import dataclass

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from app.core.cookies import AUTH_COOKIE, clear_access_cookie
from app.core.errors import error_response
from app.core.security import InvalidTokenError, decode_access_token
from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

LOGIN_PAGE = "/admin/login"
SAFE_READ_METHODS = frozenset({"GET"})


class Access(enum.Enum):
    """How the gate treats a matched route."""

    PUBLIC = "public"  # pass through untouched
    OPTIONAL = "optional"  # never rejected; identity attached when a valid token is present
    PROTECTED_PAGE = "protected_page"  # rejection redirects to the login page
    PROTECTED_API = "protected_api"  # rejection returns a 401 envelope


class Decision(enum.Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"
    REJECTED = "rejected"


@dataclass(frozen=True)
class RouteRule:
    pattern: str
    access: Access
    prefix: bool = False
    methods: frozenset[str] | None = None  # None matches every method

    def matches(self, path: str, method: str) -> bool:
        if self.methods is not None and method not in self.methods:
            return False
        if self.prefix:
            base = self.pattern.rstrip("/")
            return path == base or path.startswith(base + "/")
        return path == self.pattern


# First match wins; paths matching no rule are public.
ROUTE_TABLE: tuple[RouteRule, ...] = (
    RouteRule("/api/auth/login", Access.PUBLIC),
    RouteRule("/api/auth/refresh", Access.PUBLIC),
    RouteRule("/api/auth/accept-invite", Access.PUBLIC),
    RouteRule("/api/auth/logout", Access.PUBLIC),
    RouteRule("/admin/login", Access.PUBLIC),
    RouteRule("/admin/accept-invite", Access.PUBLIC),
    RouteRule("/api/health", Access.PUBLIC),
    RouteRule("/api/blog", Access.OPTIONAL, prefix=True, methods=SAFE_READ_METHODS),
    RouteRule("/api/events", Access.OPTIONAL, prefix=True, methods=SAFE_READ_METHODS),
    RouteRule("/api/images/", Access.PUBLIC, prefix=True),
    RouteRule("/admin", Access.PROTECTED_PAGE, prefix=True),
    RouteRule("/api/", Access.PROTECTED_API, prefix=True),
)


def classify(path: str, method: str, table: tuple[RouteRule, ...] = ROUTE_TABLE) -> Access:
    """Return the access policy for a request line."""
    for rule in table:
        if rule.matches(path, method.upper()):
            return rule.access
    return Access.PUBLIC


def extract_token(request: Request) -> str | None:
    """Bearer credential from the Authorization header, else the auth cookie."""
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(AUTH_COOKIE) or None


def identity_from_token(token: str) -> CurrentUser:
    """Raises InvalidTokenError for expired, malformed or wrong-kind tokens."""
    payload = decode_access_token(token)
    return CurrentUser(
        id=payload.sub,
        email=payload.email,
        name=payload.name,
        role=payload.role,
    )


def _reject(access: Access, code: str, message: str, clear_cookie: bool) -> Response:
    if access is Access.PROTECTED_PAGE:
        response: Response = RedirectResponse(url=LOGIN_PAGE, status_code=302)
    else:
        response = error_response(code, message, 401)
    if clear_cookie:
        clear_access_cookie(response)
    return response


def _log_decision(path: str, decision: Decision, reason: str | None = None) -> None:
    level = logging.INFO if decision is Decision.REJECTED else logging.DEBUG
    logger.log(
        level,
        "Auth gate decision",
        extra={"path": path, "decision": decision.value, "reason": reason},
    )


class AuthGateMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        access = classify(path, request.method)
        request.state.user = None

        if access is Access.PUBLIC:
            _log_decision(path, Decision.PUBLIC)
            return await call_next(request)

        token = extract_token(request)
        if access is Access.OPTIONAL:
            if token:
                try:
                    request.state.user = identity_from_token(token)
                except (InvalidTokenError, ValueError):
                    request.state.user = None
            decision = Decision.AUTHENTICATED if request.state.user else Decision.UNAUTHENTICATED
            _log_decision(path, decision)
            return await call_next(request)

        if not token:
            _log_decision(path, Decision.REJECTED, "no_token")
            return _reject(access, "UNAUTHORIZED", "Authentication required", clear_cookie=False)

        try:
            request.state.user = identity_from_token(token)
        except (InvalidTokenError, ValueError) as e:
            _log_decision(path, Decision.REJECTED, str(e))
            return _reject(access, "INVALID_TOKEN", "Invalid or expired token", clear_cookie=True)

        _log_decision(path, Decision.AUTHENTICATED)
        return await call_next(request)

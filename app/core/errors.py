"""Application error type and the handlers that render every failure as an API envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.cookies import clear_auth_cookies

logger = logging.getLogger(__name__)

_HTTP_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: "VALIDATION_ERROR",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


class ApiError(Exception):
    """
    Raised by handlers and dependencies; rendered as {success: false, error: {code, message}}.

    clear_auth_cookies: also expire the auth and refresh cookies on the error response.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        clear_auth_cookies: bool = False,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.clear_auth_cookies = clear_auth_cookies
        super().__init__(message)

    @classmethod
    def validation(cls, message: str) -> "ApiError":
        return cls("VALIDATION_ERROR", message, status.HTTP_400_BAD_REQUEST)

    @classmethod
    def unauthorized(cls, message: str = "Authentication required") -> "ApiError":
        return cls("UNAUTHORIZED", message, status.HTTP_401_UNAUTHORIZED)

    @classmethod
    def forbidden(cls, message: str = "Admin access required") -> "ApiError":
        return cls("FORBIDDEN", message, status.HTTP_403_FORBIDDEN)

    @classmethod
    def not_found(cls, message: str) -> "ApiError":
        return cls("NOT_FOUND", message, status.HTTP_404_NOT_FOUND)


def error_response(code: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": {"code": code, "message": message}},
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    response = error_response(exc.code, exc.message, exc.status_code)
    if exc.clear_auth_cookies:
        clear_auth_cookies(response)
    return response


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        "VALIDATION_ERROR",
        _format_validation_errors(exc),
        status.HTTP_400_BAD_REQUEST,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_STATUS_CODES.get(exc.status_code, "SERVER_ERROR")
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(code, message, exc.status_code)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(
        "Database error",
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(
        "SERVER_ERROR",
        "An error occurred",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(
        "SERVER_ERROR",
        "An error occurred",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach envelope-rendering handlers so no exception leaves the API unformatted."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

"""Password hashing and JWT creation/verification for authentication."""

import hashlib
import hmac
import logging
import re
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from app.core.config import settings

logger = logging.getLogger(__name__)

# PBKDF2-HMAC-SHA256 parameters. Stored digests are "<salt hex>:<key hex>".
PBKDF2_ITERATIONS = 100_000
PBKDF2_HASH_NAME = "sha256"
SALT_BYTES = 16
KEY_BYTES = 32

# bcrypt digests ($2a$, $2b$, $2y$) came from the old seed script; those users must reset.
LEGACY_HASH_PREFIX = "$2"

PASSWORD_MIN_LEN = 8

ACCESS_TOKEN_TTL = timedelta(minutes=15)
REFRESH_TOKEN_TTL = timedelta(days=7)
INVITE_TOKEN_TTL = timedelta(hours=48)
INVITE_TOKEN_BYTES = 32

TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_REFRESH = "refresh"


class InvalidTokenError(Exception):
    """Raised when a token is malformed, badly signed, of the wrong kind, or expired."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """Raised when an otherwise valid token is past its expiry."""


@dataclass(frozen=True)
class PasswordCheck:
    valid: bool
    reason: str | None = None


@dataclass(frozen=True)
class AccessTokenPayload:
    sub: int
    email: str
    name: str
    role: str


def _derive_key(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac(
        PBKDF2_HASH_NAME,
        password.encode("utf-8"),
        salt,
        PBKDF2_ITERATIONS,
        dklen=KEY_BYTES,
    )


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password with a fresh random salt. Do not store plain passwords."""
    salt = secrets.token_bytes(SALT_BYTES)
    key = _derive_key(plain_password, salt)
    return f"{salt.hex()}:{key.hex()}"


def is_legacy_hash(hashed: str) -> bool:
    return hashed.startswith(LEGACY_HASH_PREFIX)


def verify_password(plain_password: str, hashed: str | None) -> bool:
    """Verify a plain password against a stored digest. Never raises."""
    if not hashed:
        return False
    if is_legacy_hash(hashed):
        logger.warning("Legacy bcrypt digest detected; user needs a password reset")
        return False
    salt_hex, sep, key_hex = hashed.partition(":")
    if not sep or not salt_hex or not key_hex:
        return False
    try:
        salt = bytes.fromhex(salt_hex)
        stored_key = bytes.fromhex(key_hex)
    except ValueError:
        return False
    if len(stored_key) != KEY_BYTES:
        return False
    return hmac.compare_digest(_derive_key(plain_password, salt), stored_key)


def validate_password_strength(password: str) -> PasswordCheck:
    """Check the password policy: 8+ chars with an uppercase letter, a lowercase letter and a digit."""
    if len(password) < PASSWORD_MIN_LEN:
        return PasswordCheck(False, f"Password must be at least {PASSWORD_MIN_LEN} characters")
    if not re.search(r"[A-Z]", password):
        return PasswordCheck(False, "Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        return PasswordCheck(False, "Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        return PasswordCheck(False, "Password must contain at least one number")
    return PasswordCheck(True)


def _encode(claims: dict[str, Any], ttl: timedelta) -> str:
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        **claims,
        "iat": now,
        "exp": now + ttl,
        # Unique per issuance so a rotated token never equals its predecessor.
        "jti": secrets.token_hex(16),
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def _decode(token: str, expected_type: str) -> dict[str, Any]:
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except jwt.PyJWTError as e:
        raise InvalidTokenError("Invalid token") from e
    if payload.get("type") != expected_type:
        raise InvalidTokenError("Invalid token type")
    return payload


def _subject_id(payload: dict[str, Any]) -> int:
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidTokenError("Invalid token payload") from e


def create_access_token(
    user_id: int,
    email: str,
    name: str,
    role: str,
    ttl: timedelta = ACCESS_TOKEN_TTL,
) -> str:
    """Create a short-lived access token carrying the user's identity and role."""
    return _encode(
        {
            "sub": str(user_id),
            "email": email,
            "name": name,
            "role": role,
            "type": TOKEN_TYPE_ACCESS,
        },
        ttl,
    )


def decode_access_token(token: str) -> AccessTokenPayload:
    """
    Decode and validate an access token.
    Raises InvalidTokenError (TokenExpiredError when expired); refresh tokens are rejected.
    """
    payload = _decode(token, TOKEN_TYPE_ACCESS)
    try:
        return AccessTokenPayload(
            sub=_subject_id(payload),
            email=str(payload["email"]),
            name=str(payload["name"]),
            role=str(payload["role"]),
        )
    except KeyError as e:
        raise InvalidTokenError("Invalid token payload") from e


def create_refresh_token(user_id: int, ttl: timedelta = REFRESH_TOKEN_TTL) -> str:
    """Create a refresh token; it only carries the subject and the refresh discriminator."""
    return _encode({"sub": str(user_id), "type": TOKEN_TYPE_REFRESH}, ttl)


def decode_refresh_token(token: str) -> int:
    """Return the user id of a valid refresh token. Access tokens are rejected."""
    return _subject_id(_decode(token, TOKEN_TYPE_REFRESH))


def refresh_token_expiry() -> datetime:
    return datetime.now(UTC) + REFRESH_TOKEN_TTL


def generate_invite_token() -> str:
    """Opaque 256-bit invite token (hex); stored server-side and compared by exact match."""
    return secrets.token_hex(INVITE_TOKEN_BYTES)


def invite_expiry() -> datetime:
    return datetime.now(UTC) + INVITE_TOKEN_TTL

"""
tokens.py
---------
Purpose:
    Issue and verify the service's own JWTs (HS256).

Notes:
    - Two kinds: short-lived "access" tokens and long-lived "refresh" tokens,
      always signed with distinct secrets (see Settings.refresh_secret).
    - Every token embeds its kind in the "type" claim; verification rejects a
      token of the wrong kind.
    - Refresh tokens are not rotated on use; they live until natural expiry.
"""

from datetime import UTC, datetime, timedelta
from typing import Literal

import jwt
from pydantic import BaseModel

from app.config import settings
from app.utils.errors import ConfigurationError, UnauthorizedError

ALGORITHM = "HS256"

TokenKind = Literal["access", "refresh"]


class TokenPayload(BaseModel):
    """Decoded claims of a verified token."""

    user_id: str
    type: TokenKind
    iat: int
    exp: int


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str


def _secret(kind: TokenKind) -> str:
    secret = settings.JWT_SECRET if kind == "access" else settings.refresh_secret()
    if not secret:
        raise ConfigurationError(f"JWT secret for {kind} tokens is not configured")
    if kind == "refresh" and secret == settings.JWT_SECRET:
        raise ConfigurationError("JWT_REFRESH_SECRET must differ from JWT_SECRET")
    return secret


def _default_lifetime(kind: TokenKind) -> timedelta:
    if kind == "access":
        return timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)


def _issue(user_id: str, kind: TokenKind, expires_delta: timedelta | None) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "type": kind,
        "iat": int(now.timestamp()),
        "exp": int((now + (expires_delta or _default_lifetime(kind))).timestamp()),
    }
    return jwt.encode(payload, _secret(kind), algorithm=ALGORITHM)


def _verify(token: str, kind: TokenKind) -> TokenPayload:
    try:
        claims = jwt.decode(
            token,
            _secret(kind),
            algorithms=[ALGORITHM],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError(f"{kind.capitalize()} token expired") from None
    except jwt.InvalidTokenError:
        raise UnauthorizedError(f"Invalid {kind} token") from None

    if claims.get("type") != kind:
        raise UnauthorizedError("Invalid token type")

    return TokenPayload(user_id=claims["sub"], type=kind, iat=claims["iat"], exp=claims["exp"])


def generate_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    return _issue(user_id, "access", expires_delta)


def generate_refresh_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    return _issue(user_id, "refresh", expires_delta)


def generate_token_pair(user_id: str) -> TokenPair:
    return TokenPair(
        access_token=generate_access_token(user_id),
        refresh_token=generate_refresh_token(user_id),
    )


def verify_access_token(token: str) -> TokenPayload:
    """Verify an access token; expired -> "Access token expired", anything else -> invalid."""
    return _verify(token, "access")


def verify_refresh_token(token: str) -> TokenPayload:
    return _verify(token, "refresh")

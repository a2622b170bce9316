"""Bearer token helpers.

Tokens are minted by the external identity provider; this service only
verifies them. ``create_access_token`` exists for local development and tests
and produces tokens in the same shape the provider issues.
"""
from __future__ import annotations

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from newslens.core.settings import settings
from newslens.db.time import utcnow


def create_access_token(
    user_id: str,
    *,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Return a signed JWT whose subject is ``user_id``."""
    issued_at = utcnow()
    expires_at = issued_at + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims: dict[str, Any] = {
        "sub": user_id,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    if email is not None:
        claims["email"] = email
    if settings.jwt_audience:
        claims["aud"] = settings.jwt_audience
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and verify a bearer token.

    Raises:
        JWTError: If the signature, expiry or audience check fails.
    """
    options = {"verify_aud": bool(settings.jwt_audience)}
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
        options=options,
    )


__all__ = ["JWTError", "create_access_token", "decode_access_token"]

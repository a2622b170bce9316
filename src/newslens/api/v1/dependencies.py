"""Shared API dependencies for authentication and common functionality."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from newslens.core.security import JWTError, decode_access_token
from newslens.db.session import get_db

# Missing credentials are reported as 401 by ``get_current_user`` itself.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity established from a verified bearer token.

    Passed explicitly into each service call instead of living in ambient
    session state.
    """

    user_id: str
    email: str | None = None


def _unauthorized(detail: str = "Unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _user_from_token(token: str) -> AuthenticatedUser:
    try:
        payload = decode_access_token(token)
    except JWTError as err:
        raise _unauthorized("Could not validate credentials") from err

    subject = payload.get("sub")
    if not subject or not isinstance(subject, str):
        raise _unauthorized("Could not validate credentials")
    return AuthenticatedUser(user_id=subject, email=payload.get("email"))


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> AuthenticatedUser:
    """Return the authenticated caller.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired.
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("No authorization header")
    return _user_from_token(credentials.credentials)


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> AuthenticatedUser | None:
    """Return the caller if a token was sent, ``None`` for anonymous requests.

    A token that is present but invalid is still rejected.
    """
    if credentials is None or not credentials.credentials:
        return None
    return _user_from_token(credentials.credentials)


# Type aliases for identity dependencies
CurrentUserDep = Annotated[AuthenticatedUser, Depends(get_current_user)]
OptionalUserDep = Annotated[AuthenticatedUser | None, Depends(get_optional_user)]

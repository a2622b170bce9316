"""Error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; ``newslens.main`` renders them as
``{"success": false, "error": <message>}`` with the status code carried by
the exception class.
"""

from __future__ import annotations

from fastapi import status


class NewsLensError(RuntimeError):
    """Base exception for all request-terminating failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(NewsLensError):
    """Raised when the caller supplied missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(NewsLensError):
    """Raised when no valid identity accompanies the request."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(NewsLensError):
    """Raised when a referenced article or badge does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class UpstreamError(NewsLensError):
    """Raised when the inference API or a scrape target is unavailable.

    Upstream failures are never retried.
    """

    status_code = status.HTTP_502_BAD_GATEWAY


class PersistenceError(NewsLensError):
    """Raised when a store read or write fails and the operation is aborted."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


__all__ = [
    "NewsLensError",
    "ValidationError",
    "UnauthorizedError",
    "NotFoundError",
    "UpstreamError",
    "PersistenceError",
]

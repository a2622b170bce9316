# src/newslens/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    analysis_router,
    articles_router,
    auth_router,
    badges_router,
    votes_router,
)

__all__ = [
    "analysis_router",
    "articles_router",
    "auth_router",
    "badges_router",
    "votes_router",
]

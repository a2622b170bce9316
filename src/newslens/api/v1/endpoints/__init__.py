# src/newslens/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .analysis import router as analysis_router
from .articles import router as articles_router
from .auth import router as auth_router
from .badges import router as badges_router
from .votes import router as votes_router

__all__ = [
    "analysis_router",
    "articles_router",
    "auth_router",
    "badges_router",
    "votes_router",
]

# src/newslens/models/__init__.py
"""SQLAlchemy models for the NewsLens application."""

from .analysis_request import AnalysisRequest
from .article import Article
from .badge import Badge, UserBadge
from .profile import Profile
from .vote import ArticleVote

__all__ = [
    "AnalysisRequest",
    "Article",
    "ArticleVote",
    "Badge", "UserBadge",
    "Profile",
]

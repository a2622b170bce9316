# src/newslens/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .analysis import (
    AnalysisCreate,
    AnalysisResponse,
    ArticleAnalysis,
    ScrapeRequest,
    ScrapeResponse,
)
from .article import ArticleDetailResponse, ArticleResponse, RelatedArticlesResponse
from .badge import (
    BadgeResponse,
    LoginEventResponse,
    ProfileStats,
    UserBadgeResponse,
    UserBadgesResponse,
)
from .vote import MyVoteResponse, VoteCreate, VoteResponse

__all__ = [
    "AnalysisCreate", "AnalysisResponse", "ArticleAnalysis",
    "ScrapeRequest", "ScrapeResponse",
    "ArticleDetailResponse", "ArticleResponse", "RelatedArticlesResponse",
    "BadgeResponse", "LoginEventResponse", "ProfileStats",
    "UserBadgeResponse", "UserBadgesResponse",
    "MyVoteResponse", "VoteCreate", "VoteResponse",
]

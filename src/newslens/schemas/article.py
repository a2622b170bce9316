"""Article Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from .vote import VoteType


class ArticleResponse(BaseModel):
    """Stored analysis snapshot of an article."""

    id: str
    headline: str
    content: str | None = None
    url: str | None = None
    source_name: str | None = None
    bias_score: float | None = None
    bias_label: str | None = None
    sentiment_score: float | None = None
    sentiment_label: str | None = None
    fact_check_score: float | None = None
    credibility_score: float | None = None
    ai_explanation: str | None = None
    fact_check_explanation: str | None = None
    published_at: datetime | None = None
    analyzed_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ArticleDetailResponse(ArticleResponse):
    """Article snapshot with ledger-derived vote totals."""

    upvotes: int = 0
    downvotes: int = 0
    user_vote: VoteType | None = None


class RelatedArticlesResponse(BaseModel):
    """Most recently analyzed articles matching the feed filters."""

    success: bool = True
    articles: list[ArticleResponse]

# src/newslens/api/v1/endpoints/articles.py
"""Article read endpoints for the NewsLens API."""

from fastapi import APIRouter, Query

from newslens.api.v1.dependencies import OptionalUserDep, SessionDep
from newslens.schemas.article import (
    ArticleDetailResponse,
    ArticleResponse,
    RelatedArticlesResponse,
)
from newslens.services.articles import get_article_with_votes, list_related_articles

router = APIRouter(prefix="/articles", tags=["articles"])


@router.get("/related", response_model=RelatedArticlesResponse)
async def related_articles(
    db: SessionDep,
    exclude_article_id: str | None = Query(None, description="Article to leave out of the feed"),
    bias_label: str | None = Query(None, description="Only return articles with this bias label"),
    limit: int | None = Query(None, description="Maximum number of articles to return"),
) -> RelatedArticlesResponse:
    """Return the most recently analyzed articles, optionally filtered by bias."""
    articles = list_related_articles(
        db,
        exclude_article_id=exclude_article_id,
        bias_label=bias_label,
        limit=limit,
    )
    return RelatedArticlesResponse(
        articles=[ArticleResponse.model_validate(article) for article in articles],
    )


@router.get("/{article_id}", response_model=ArticleDetailResponse)
async def get_article(
    article_id: str,
    db: SessionDep,
    current_user: OptionalUserDep,
) -> ArticleDetailResponse:
    """Return a stored analysis with its vote totals."""
    return get_article_with_votes(
        db,
        article_id,
        current_user.user_id if current_user else None,
    )

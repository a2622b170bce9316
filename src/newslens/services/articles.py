"""Read-side queries over stored articles."""
from __future__ import annotations

from sqlalchemy.orm import Session

from newslens.core.errors import NotFoundError, ValidationError
from newslens.core.settings import settings
from newslens.models import Article
from newslens.models.article import BIAS_LABELS
from newslens.schemas.article import ArticleDetailResponse
from newslens.services.voting import count_article_votes, get_user_vote

__all__ = [
    "get_article_or_404",
    "get_article_with_votes",
    "list_related_articles",
]


def get_article_or_404(db: Session, article_id: str) -> Article:
    """Return an article or raise ``NotFoundError``."""
    article = db.get(Article, article_id)
    if article is None:
        raise NotFoundError("Article not found")
    return article


def get_article_with_votes(
    db: Session,
    article_id: str,
    user_id: str | None = None,
) -> ArticleDetailResponse:
    """Return an article with ledger-derived vote totals and the caller's vote."""
    article = get_article_or_404(db, article_id)
    upvotes, downvotes = count_article_votes(db, article_id)
    detail = ArticleDetailResponse.model_validate(article)
    detail.upvotes = upvotes
    detail.downvotes = downvotes
    if user_id is not None:
        detail.user_vote = get_user_vote(db, user_id, article_id)
    return detail


def list_related_articles(
    db: Session,
    *,
    exclude_article_id: str | None = None,
    bias_label: str | None = None,
    limit: int | None = None,
) -> list[Article]:
    """Return the most recently analyzed articles matching the filters."""
    limit = settings.related_default_limit if limit is None else limit
    if not 1 <= limit <= settings.related_max_limit:
        raise ValidationError(f"limit must be between 1 and {settings.related_max_limit}")
    if bias_label is not None and bias_label not in BIAS_LABELS:
        raise ValidationError("Unknown bias label")

    query = db.query(Article)
    if exclude_article_id:
        query = query.filter(Article.id != exclude_article_id)
    if bias_label:
        query = query.filter(Article.bias_label == bias_label)
    return query.order_by(Article.analyzed_at.desc()).limit(limit).all()

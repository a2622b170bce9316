# src/newslens/models/article.py
"""SQLAlchemy model for analyzed news articles."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from newslens.db.session import Base
from newslens.db.time import utcnow

BIAS_LABELS = ("left", "center-left", "center", "center-right", "right")
SENTIMENT_LABELS = ("very negative", "negative", "neutral", "positive", "very positive")


class Article(Base):
    """Immutable snapshot of one LLM analysis.

    Rows are written once by the analysis handler. Vote totals are always
    derived from ``article_votes`` and never cached here.
    """

    __tablename__ = "articles"
    __table_args__ = (
        CheckConstraint(
            "bias_label IS NULL OR bias_label IN "
            "('left', 'center-left', 'center', 'center-right', 'right')",
            name="ck_articles_bias_label",
        ),
        Index("ix_articles_analyzed_at", "analyzed_at"),
        Index("ix_articles_bias_label", "bias_label"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    headline: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    source_name: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Negative leans left, positive leans right, 0 is neutral (-100..100).
    bias_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    bias_label: Mapped[str | None] = mapped_column(String(16), nullable=True)
    sentiment_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    sentiment_label: Mapped[str | None] = mapped_column(String(16), nullable=True)
    fact_check_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    credibility_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    ai_explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    # JSON document: explanation, key_findings, methodology, limitations, confidence.
    fact_check_explanation: Mapped[str | None] = mapped_column(Text, nullable=True)

    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    analyzed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=utcnow,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

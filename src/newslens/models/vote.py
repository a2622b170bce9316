# src/newslens/models/vote.py
"""Models capturing community votes on articles."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from newslens.db.session import Base
from newslens.db.time import utcnow

VOTE_UPVOTE = "upvote"
VOTE_DOWNVOTE = "downvote"
VOTE_TYPES = (VOTE_UPVOTE, VOTE_DOWNVOTE)


class ArticleVote(Base):
    """Per-user vote on an article.

    At most one live vote exists per (article, user); toggling the same
    direction deletes the row.
    """

    __tablename__ = "article_votes"
    __table_args__ = (
        CheckConstraint(
            "vote_type IN ('upvote', 'downvote')",
            name="ck_article_votes_vote_type",
        ),
        UniqueConstraint("article_id", "user_id", name="uq_article_votes_article_user"),
        Index("ix_article_votes_user_id", "user_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    article_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("articles.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    vote_type: Mapped[str] = mapped_column(String(8), nullable=False)
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

# src/newslens/services/voting.py
"""Voting workflow: ledger mutation, reputation and vote badges."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Final

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from newslens.core.errors import NewsLensError, NotFoundError, PersistenceError, ValidationError
from newslens.db.time import utcnow
from newslens.db.upsert import insert_ignore_conflict
from newslens.models import Article, ArticleVote
from newslens.models.vote import VOTE_DOWNVOTE, VOTE_TYPES, VOTE_UPVOTE
from newslens.services.badges import award_vote_milestones
from newslens.services.profiles import adjust_reputation

logger = logging.getLogger(__name__)

OPERATION_NEW = "new"
OPERATION_CHANGED = "changed"
OPERATION_REMOVED = "removed"

# Only first-time votes move reputation; changes and toggle-offs do not
# reverse the original delta.
REPUTATION_DELTAS: Final[dict[str, int]] = {
    VOTE_UPVOTE: 5,
    VOTE_DOWNVOTE: -2,
}


@dataclass(frozen=True)
class VoteOutcome:
    """Result of a vote together with fresh ledger totals."""

    operation: str
    upvotes: int
    downvotes: int
    user_vote: str | None


def count_article_votes(db: Session, article_id: str) -> tuple[int, int]:
    """Return ``(upvotes, downvotes)`` for an article from the vote ledger."""
    rows = (
        db.query(ArticleVote.vote_type, func.count(ArticleVote.id))
        .filter(ArticleVote.article_id == article_id)
        .group_by(ArticleVote.vote_type)
        .all()
    )
    totals = dict(rows)
    return totals.get(VOTE_UPVOTE, 0), totals.get(VOTE_DOWNVOTE, 0)


def get_user_vote(db: Session, user_id: str, article_id: str) -> str | None:
    """Return the user's live vote direction on an article, if any."""
    return (
        db.query(ArticleVote.vote_type)
        .filter(
            ArticleVote.article_id == article_id,
            ArticleVote.user_id == user_id,
        )
        .scalar()
    )


def _find_vote_for_update(db: Session, user_id: str, article_id: str) -> ArticleVote | None:
    return (
        db.query(ArticleVote)
        .filter(
            ArticleVote.article_id == article_id,
            ArticleVote.user_id == user_id,
        )
        .with_for_update()
        .populate_existing()
        .first()
    )


class VotingService:
    """Service applying toggle/change semantics to the vote ledger."""

    @staticmethod
    def _apply_vote(
        db: Session,
        *,
        user_id: str,
        article_id: str,
        vote_type: str,
    ) -> str:
        existing_vote = _find_vote_for_update(db, user_id, article_id)

        if existing_vote is None:
            inserted = insert_ignore_conflict(
                db,
                ArticleVote,
                {
                    "id": str(uuid.uuid4()),
                    "article_id": article_id,
                    "user_id": user_id,
                    "vote_type": vote_type,
                },
                ("article_id", "user_id"),
            )
            if inserted:
                return OPERATION_NEW

            # A concurrent request inserted the row first; apply toggle/change to it.
            logger.info("Concurrent vote by user %s on article %s; re-reading", user_id, article_id)
            existing_vote = _find_vote_for_update(db, user_id, article_id)
            if existing_vote is None:
                raise PersistenceError("Failed to record vote")

        if existing_vote.vote_type == vote_type:
            db.delete(existing_vote)
            return OPERATION_REMOVED

        existing_vote.vote_type = vote_type
        existing_vote.updated_at = utcnow()
        return OPERATION_CHANGED

    @staticmethod
    def _apply_bookkeeping(
        db: Session,
        *,
        user_id: str,
        vote_type: str,
        operation: str,
    ) -> None:
        """Update reputation and vote badges inside a savepoint.

        Failures roll back to the savepoint and are logged, so the vote itself
        is still committed.
        """
        try:
            with db.begin_nested():
                if operation == OPERATION_NEW:
                    adjust_reputation(db, user_id, REPUTATION_DELTAS[vote_type])
                awarded = award_vote_milestones(db, user_id)
        except SQLAlchemyError as exc:
            logger.warning(
                "Reputation/badge update skipped for user %s: %s",
                user_id,
                exc,
                exc_info=True,
            )
            return

        for badge_name in awarded:
            logger.info("User %s earned %r", user_id, badge_name)

    @classmethod
    def cast_vote(
        cls,
        db: Session,
        *,
        user_id: str,
        article_id: str,
        vote_type: str,
    ) -> VoteOutcome:
        """Cast, change or toggle off a vote on an article.

        Args:
            db: Database session; committed once on success.
            user_id: Authenticated voter.
            article_id: Article being voted on.
            vote_type: ``"upvote"`` or ``"downvote"``.

        Returns:
            The operation performed plus ledger-derived totals and the voter's
            resulting vote.

        Raises:
            ValidationError: If ``vote_type`` is not a known direction.
            NotFoundError: If the article does not exist.
            PersistenceError: If the store rejects a read or write.
        """
        if vote_type not in VOTE_TYPES or not article_id:
            raise ValidationError("Invalid parameters")

        logger.info("Processing %s for article %s by user %s", vote_type, article_id, user_id)

        try:
            if db.query(Article.id).filter(Article.id == article_id).first() is None:
                raise NotFoundError("Article not found")

            operation = cls._apply_vote(
                db,
                user_id=user_id,
                article_id=article_id,
                vote_type=vote_type,
            )
            db.flush()

            cls._apply_bookkeeping(
                db,
                user_id=user_id,
                vote_type=vote_type,
                operation=operation,
            )

            upvotes, downvotes = count_article_votes(db, article_id)
            db.commit()
        except NewsLensError:
            db.rollback()
            raise
        except SQLAlchemyError as err:
            db.rollback()
            logger.error("Vote on article %s by user %s failed: %s", article_id, user_id, err)
            raise PersistenceError("Failed to record vote") from err

        logger.info(
            "Vote processed (%s). New counts - upvotes: %d, downvotes: %d",
            operation,
            upvotes,
            downvotes,
        )
        return VoteOutcome(
            operation=operation,
            upvotes=upvotes,
            downvotes=downvotes,
            user_vote=None if operation == OPERATION_REMOVED else vote_type,
        )


__all__ = [
    "OPERATION_CHANGED",
    "OPERATION_NEW",
    "OPERATION_REMOVED",
    "REPUTATION_DELTAS",
    "VoteOutcome",
    "VotingService",
    "count_article_votes",
    "get_user_vote",
]

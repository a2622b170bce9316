"""Badge catalog and idempotent badge grants.

Award records are a set over ``(user_id, badge_id)``. Grants rely on the
``uq_user_badges_user_badge`` constraint with insert-ignore-conflict
semantics, so re-evaluating a milestone for a user who already holds the
badge is a no-op even under concurrent requests.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Final

from sqlalchemy import func
from sqlalchemy.orm import Session

from newslens.db.time import utcnow
from newslens.db.upsert import insert_ignore_conflict
from newslens.models import ArticleVote, Badge, Profile, UserBadge
from newslens.schemas.badge import UserBadgeResponse, UserBadgesResponse
from newslens.services.profiles import get_or_create_profile, get_profile_stats

logger = logging.getLogger(__name__)

REQUIREMENT_VOTES = "votes"
REQUIREMENT_STREAK = "streak"


@dataclass(frozen=True)
class BadgeDefinition:
    """Static description of a catalog badge."""

    name: str
    description: str
    icon: str
    color: str
    requirement_type: str
    requirement_value: int


BADGE_CATALOG: Final[tuple[BadgeDefinition, ...]] = (
    BadgeDefinition("First Vote", "Cast your first vote", "🗳️", "#3b82f6", REQUIREMENT_VOTES, 1),
    BadgeDefinition("Active Voter", "Cast 10 votes", "🔥", "#f97316", REQUIREMENT_VOTES, 10),
    BadgeDefinition("Vote Champion", "Cast 50 votes", "🏆", "#eab308", REQUIREMENT_VOTES, 50),
    BadgeDefinition("Vote Legend", "Cast 100 votes", "👑", "#a855f7", REQUIREMENT_VOTES, 100),
    BadgeDefinition("Daily Reader", "Log in 3 days in a row", "📰", "#22c55e", REQUIREMENT_STREAK, 3),
    BadgeDefinition("Week Warrior", "Log in 7 days in a row", "⚔️", "#ef4444", REQUIREMENT_STREAK, 7),
)

# Vote milestones are "at least N votes"; ordered ascending.
VOTE_MILESTONES: Final[tuple[tuple[int, str], ...]] = tuple(
    (badge.requirement_value, badge.name)
    for badge in BADGE_CATALOG
    if badge.requirement_type == REQUIREMENT_VOTES
)

# Streak badges fire only when the streak lands exactly on the value.
STREAK_BADGES: Final[dict[int, str]] = {
    badge.requirement_value: badge.name
    for badge in BADGE_CATALOG
    if badge.requirement_type == REQUIREMENT_STREAK
}


def ensure_badge_catalog(db: Session) -> int:
    """Insert any catalog badges missing from the ``badges`` table.

    Returns:
        Number of badges created.
    """
    existing = {name for (name,) in db.query(Badge.name).all()}
    created = 0
    for definition in BADGE_CATALOG:
        if definition.name in existing:
            continue
        db.add(
            Badge(
                name=definition.name,
                description=definition.description,
                icon=definition.icon,
                color=definition.color,
                requirement_type=definition.requirement_type,
                requirement_value=definition.requirement_value,
            )
        )
        created += 1
    if created:
        db.commit()
        logger.info("Seeded %d badge(s) into the catalog", created)
    return created


def grant_badge(db: Session, user_id: str, badge_name: str) -> bool:
    """Grant ``badge_name`` to ``user_id`` unless already held.

    Returns:
        True if a new award row was created, False if the user already held
        the badge or the badge is missing from the catalog.
    """
    badge_id = db.query(Badge.id).filter(Badge.name == badge_name).scalar()
    if badge_id is None:
        logger.warning("Badge %r is not in the catalog; skipping award", badge_name)
        return False

    created = insert_ignore_conflict(
        db,
        UserBadge,
        {
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "badge_id": badge_id,
            "earned_at": utcnow(),
        },
        ("user_id", "badge_id"),
    )
    if not created:
        return False

    get_or_create_profile(db, user_id)
    db.query(Profile).filter(Profile.user_id == user_id).update(
        {Profile.total_badges: Profile.total_badges + 1},
        synchronize_session="fetch",
    )
    logger.info("Awarded badge %r to user %s", badge_name, user_id)
    return True


def count_user_votes(db: Session, user_id: str) -> int:
    """Return the number of live votes the user holds across all articles."""
    return db.query(func.count(ArticleVote.id)).filter(ArticleVote.user_id == user_id).scalar() or 0


def award_vote_milestones(db: Session, user_id: str) -> list[str]:
    """Grant every vote-count badge whose threshold the user has reached.

    Returns:
        Names of badges newly granted by this call.
    """
    total_votes = count_user_votes(db, user_id)
    awarded: list[str] = []
    for threshold, badge_name in VOTE_MILESTONES:
        if total_votes < threshold:
            break
        if grant_badge(db, user_id, badge_name):
            awarded.append(badge_name)
    return awarded


def list_user_badges(db: Session, user_id: str) -> list[UserBadge]:
    """Return the user's awards with catalog metadata, newest first."""
    return (
        db.query(UserBadge)
        .filter(UserBadge.user_id == user_id)
        .order_by(UserBadge.earned_at.desc())
        .all()
    )


def get_user_badges(db: Session, user_id: str) -> UserBadgesResponse:
    """Return the user's awards with their profile stats."""
    return UserBadgesResponse(
        badges=[UserBadgeResponse.model_validate(award) for award in list_user_badges(db, user_id)],
        profile=get_profile_stats(db, user_id),
    )


def list_catalog(db: Session) -> list[Badge]:
    """Return all catalog badges ordered by requirement."""
    return (
        db.query(Badge)
        .order_by(Badge.requirement_type, Badge.requirement_value)
        .all()
    )


__all__ = [
    "BADGE_CATALOG",
    "BadgeDefinition",
    "STREAK_BADGES",
    "VOTE_MILESTONES",
    "award_vote_milestones",
    "count_user_votes",
    "ensure_badge_catalog",
    "get_user_badges",
    "grant_badge",
    "list_catalog",
    "list_user_badges",
]

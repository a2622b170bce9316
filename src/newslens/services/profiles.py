"""Lazy creation and lookup of per-user profiles."""
from __future__ import annotations

from sqlalchemy.orm import Session

from newslens.models import Profile
from newslens.schemas.badge import ProfileStats

__all__ = [
    "get_or_create_profile",
    "adjust_reputation",
    "get_profile_stats",
]


def get_or_create_profile(db: Session, user_id: str) -> Profile:
    """Return the caller's profile, creating an empty one on first use."""
    profile = db.get(Profile, user_id)
    if profile is None:
        profile = Profile(
            user_id=user_id,
            reputation_score=0,
            daily_streak=0,
            total_badges=0,
        )
        db.add(profile)
        db.flush()
    return profile


def adjust_reputation(db: Session, user_id: str, amount: int) -> None:
    """Add ``amount`` (possibly negative) to the user's reputation score.

    The increment is applied in SQL so concurrent adjustments do not overwrite
    each other.
    """
    get_or_create_profile(db, user_id)
    db.query(Profile).filter(Profile.user_id == user_id).update(
        {Profile.reputation_score: Profile.reputation_score + amount},
        synchronize_session="fetch",
    )


def get_profile_stats(db: Session, user_id: str) -> ProfileStats:
    """Return gamification counters, all zero when no profile exists yet."""
    profile = db.get(Profile, user_id)
    if profile is None:
        return ProfileStats()
    return ProfileStats.model_validate(profile)

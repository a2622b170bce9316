"""Daily login streak tracking."""

from __future__ import annotations

import logging
from datetime import date, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from newslens.core.errors import PersistenceError
from newslens.db.time import utctoday
from newslens.models import Profile
from newslens.services.badges import STREAK_BADGES, grant_badge
from newslens.services.profiles import get_or_create_profile

logger = logging.getLogger(__name__)


def next_streak(last_login_date: date | None, current_streak: int, today: date) -> int:
    """Return the streak value after a login on ``today``.

    A login on the day after ``last_login_date`` extends the streak; any gap
    resets it to 1. Same-day logins are handled by the caller.
    """
    if last_login_date is not None and last_login_date == today - timedelta(days=1):
        return current_streak + 1
    return 1


def _grant_streak_badge(db: Session, user_id: str, badge_name: str) -> None:
    """Grant a streak badge inside a savepoint; failures leave the streak intact."""
    try:
        with db.begin_nested():
            grant_badge(db, user_id, badge_name)
    except SQLAlchemyError as exc:
        logger.warning(
            "Streak badge %r skipped for user %s: %s",
            badge_name,
            user_id,
            exc,
            exc_info=True,
        )


class StreakService:
    """Service counting consecutive login days and granting streak badges."""

    @staticmethod
    def record_login(db: Session, user_id: str, today: date | None = None) -> Profile:
        """Record a sign-in for ``user_id``.

        Streak badges are granted only when the new streak lands exactly on a
        badge value; skipping past it never grants the badge retroactively.

        Args:
            db: Database session; committed when the streak changes.
            user_id: Authenticated user.
            today: Calendar date of the login, defaulting to the UTC date.

        Returns:
            The user's profile after the update.

        Raises:
            PersistenceError: If the profile cannot be read or written.
        """
        today = today or utctoday()
        try:
            profile = get_or_create_profile(db, user_id)
            if profile.last_login_date == today:
                db.commit()
                return profile

            streak = next_streak(profile.last_login_date, profile.daily_streak or 0, today)
            profile.daily_streak = streak
            profile.last_login_date = today
            db.flush()
            logger.info("User %s daily streak is now %d", user_id, streak)

            badge_name = STREAK_BADGES.get(streak)
            if badge_name is not None:
                _grant_streak_badge(db, user_id, badge_name)

            db.commit()
        except SQLAlchemyError as err:
            db.rollback()
            logger.error("Updating daily streak for user %s failed: %s", user_id, err)
            raise PersistenceError("Failed to update daily streak") from err

        db.refresh(profile)
        return profile


__all__ = ["StreakService", "next_streak"]

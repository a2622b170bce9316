"""Badge and profile Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BadgeResponse(BaseModel):
    """Catalog metadata for a badge."""

    id: str
    name: str
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    requirement_type: str | None = None
    requirement_value: int | None = None

    model_config = ConfigDict(from_attributes=True)


class UserBadgeResponse(BaseModel):
    """An earned badge joined with its catalog entry."""

    id: str
    badge_id: str
    earned_at: datetime
    badge: BadgeResponse

    model_config = ConfigDict(from_attributes=True)


class ProfileStats(BaseModel):
    """Gamification counters shown next to the badge shelf."""

    reputation_score: int = 0
    total_badges: int = 0
    daily_streak: int = 0

    model_config = ConfigDict(from_attributes=True)


class UserBadgesResponse(BaseModel):
    """Badges earned by the caller plus their profile stats."""

    success: bool = True
    badges: list[UserBadgeResponse]
    profile: ProfileStats


class LoginEventResponse(BaseModel):
    """Result of recording a sign-in for streak tracking."""

    success: bool
    daily_streak: int | None = None

# src/newslens/models/profile.py
"""Per-user reputation and streak state."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from newslens.db.session import Base
from newslens.db.time import utcnow


class Profile(Base):
    """Mutable gamification state, created lazily on first authenticated use."""

    __tablename__ = "profiles"

    # Subject claim issued by the identity provider.
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    # May go negative; downvotes cost reputation.
    reputation_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    daily_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_login_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    # Denormalized count of user_badges rows.
    total_badges: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

# src/newslens/api/v1/endpoints/auth.py
"""Sign-in event endpoints for the NewsLens API.

Credentials are handled by the identity provider; the client reports each
successful sign-in here so daily streaks can be tracked.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from newslens.api.v1.dependencies import CurrentUserDep, SessionDep
from newslens.core.errors import NewsLensError
from newslens.schemas.badge import LoginEventResponse
from newslens.services.streak import StreakService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/login-event",
    response_model=LoginEventResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def record_login_event(current_user: CurrentUserDep, db: SessionDep) -> LoginEventResponse:
    """Record a sign-in; streak failures never block the client's login."""
    try:
        profile = StreakService.record_login(db, current_user.user_id)
    except NewsLensError as exc:
        logger.error("Error updating daily streak for %s: %s", current_user.user_id, exc)
        return LoginEventResponse(success=False)
    return LoginEventResponse(success=True, daily_streak=profile.daily_streak)

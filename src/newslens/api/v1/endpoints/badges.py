# src/newslens/api/v1/endpoints/badges.py
"""Badge and profile endpoints for the NewsLens API."""

from fastapi import APIRouter

from newslens.api.v1.dependencies import CurrentUserDep, SessionDep
from newslens.schemas.badge import BadgeResponse, UserBadgesResponse
from newslens.services.badges import get_user_badges, list_catalog

router = APIRouter(prefix="/badges", tags=["badges"])


@router.get("/", response_model=list[BadgeResponse])
async def list_badges(db: SessionDep) -> list[BadgeResponse]:
    """Return the badge catalog."""
    return [BadgeResponse.model_validate(badge) for badge in list_catalog(db)]


@router.get("/me", response_model=UserBadgesResponse)
async def get_my_badges(current_user: CurrentUserDep, db: SessionDep) -> UserBadgesResponse:
    """Return the caller's earned badges and profile stats."""
    return get_user_badges(db, current_user.user_id)

# src/newslens/api/v1/endpoints/votes.py
"""Vote-related endpoints for the NewsLens API."""

from fastapi import APIRouter

from newslens.api.v1.dependencies import CurrentUserDep, SessionDep
from newslens.schemas.vote import MyVoteResponse, VoteCreate, VoteResponse
from newslens.services.voting import VotingService, get_user_vote

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", response_model=VoteResponse)
async def cast_vote(
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResponse:
    """Cast, change or toggle off a vote on an article."""
    outcome = VotingService.cast_vote(
        db,
        user_id=current_user.user_id,
        article_id=vote_data.article_id,
        vote_type=vote_data.vote_type,
    )
    return VoteResponse(
        operation=outcome.operation,
        upvotes=outcome.upvotes,
        downvotes=outcome.downvotes,
        user_vote=outcome.user_vote,
    )


@router.get("/{article_id}/my-vote", response_model=MyVoteResponse)
async def get_my_vote(
    article_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MyVoteResponse:
    """Get current user's vote on a specific article."""
    return MyVoteResponse(vote_type=get_user_vote(db, current_user.user_id, article_id))

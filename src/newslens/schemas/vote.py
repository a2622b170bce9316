"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field

VoteType = Literal["upvote", "downvote"]
VoteOperation = Literal["new", "changed", "removed"]


class VoteCreate(BaseModel):
    """Schema for casting, changing or toggling off a vote."""

    article_id: str = Field(..., min_length=1, description="Identifier of the voted article")
    vote_type: VoteType = Field(..., description="upvote or downvote")


class VoteResponse(BaseModel):
    """Outcome of a vote together with fresh ledger totals."""

    success: bool = True
    operation: VoteOperation
    upvotes: int
    downvotes: int
    user_vote: VoteType | None = Field(
        None,
        description="The caller's vote after the operation; null when toggled off",
    )


class MyVoteResponse(BaseModel):
    """The caller's current vote on an article."""

    vote_type: VoteType | None = None

"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import Field

from tourit.schemas.common import CamelModel


class VoteCreate(CamelModel):
    """Schema for casting a vote on a post or comment."""

    direction: Literal[-1, 1] = Field(
        ...,
        description="Vote direction must be 1 (like) or -1 (dislike)",
    )


class ScoreResponse(CamelModel):
    """Score recomputed after a vote toggle."""

    score: int

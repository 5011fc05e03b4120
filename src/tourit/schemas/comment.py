"""Comment-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from tourit.schemas.common import CamelModel


class CommentCreate(CamelModel):
    """Schema for creating a comment; the post id comes from the route."""

    body: str = Field(..., min_length=1, max_length=10_000, description="Comment text")
    parent_comment_id: int | None = Field(None, description="Comment being replied to")

    @field_validator("body")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Comment body must not be blank")
        return v


class CommentResponse(CamelModel):
    """Comment returned by the API, with nested replies in tree views."""

    id: int
    body: str
    user_id: int | None = None
    author_username: str
    post_id: int
    parent_comment_id: int | None = None
    created_at: datetime
    score: int
    is_deleted: bool = False
    replies: list[CommentResponse] = Field(default_factory=list)


CommentResponse.model_rebuild()

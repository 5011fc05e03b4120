"""Models capturing voting interactions on posts and comments."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Integer,
    SmallInteger,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tourit.db.session import Base

if TYPE_CHECKING:
    from tourit.models.comment import Comment
    from tourit.models.post import Post

UPVOTE = 1
DOWNVOTE = -1
VOTE_DIRECTIONS = (UPVOTE, DOWNVOTE)


class Vote(Base):
    """Per-user vote on a post.

    "No vote" is the absence of a row; a stored vote is always +1 or -1.
    """

    __tablename__ = "vote"
    __table_args__ = (
        CheckConstraint("vote_type IN (1, -1)", name="ck_vote_vote_type"),
        UniqueConstraint("user_id", "post_id", name="uq_vote_user_post"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="RESTRICT"),
        nullable=False,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    vote_type: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    post: Mapped[Post] = relationship("Post", back_populates="votes")


class CommentVote(Base):
    """Per-user vote on a comment."""

    __tablename__ = "comment_vote"
    __table_args__ = (
        CheckConstraint("vote_type IN (1, -1)", name="ck_comment_vote_vote_type"),
        UniqueConstraint("user_id", "comment_id", name="uq_comment_vote_user_comment"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="RESTRICT"),
        nullable=False,
    )
    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    vote_type: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    comment: Mapped[Comment] = relationship("Comment", back_populates="comment_votes")

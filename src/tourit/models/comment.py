# src/tourit/models/comment.py
"""SQLAlchemy model for threaded comments."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tourit.db.session import Base
from tourit.models.mixins import CreatedAtMixin, RedactableMixin
from tourit.models.user import User

if TYPE_CHECKING:
    from tourit.models.post import Post
    from tourit.models.vote import CommentVote


class Comment(CreatedAtMixin, RedactableMixin, Base):
    """Comment on a post, optionally replying to another comment.

    The tree is stored flat through ``parent_comment_id``; top-level comments
    have it NULL. The hierarchy is rebuilt in application code on read.
    """

    __tablename__ = "comment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    # Owner recorded at redaction time so "my" listings still find the row
    # after user_id is cleared.
    former_user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    parent_comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comment.id"),
        nullable=True,
        index=True,
    )

    author: Mapped[User | None] = relationship("User", foreign_keys=[user_id])
    post: Mapped[Post] = relationship("Post", back_populates="comments")
    parent: Mapped[Comment | None] = relationship(
        "Comment",
        remote_side=[id],
        back_populates="replies",
    )
    replies: Mapped[list[Comment]] = relationship("Comment", back_populates="parent")
    comment_votes: Mapped[list[CommentVote]] = relationship(
        "CommentVote",
        back_populates="comment",
        cascade="all, delete-orphan",
    )

    @property
    def score(self) -> int:
        """Sum of vote directions, computed from the loaded votes."""
        return sum(vote.vote_type for vote in self.comment_votes)

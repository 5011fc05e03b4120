# src/tourit/models/post.py
"""SQLAlchemy model for posts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tourit.db.session import Base
from tourit.models.mixins import CreatedAtMixin, RedactableMixin
from tourit.models.reference import Country, PostCategory, PostTag
from tourit.models.user import User

if TYPE_CHECKING:
    from tourit.models.comment import Comment
    from tourit.models.vote import Vote


class Post(CreatedAtMixin, RedactableMixin, Base):
    """Primary content entity: a titled write-up tagged to a country.

    Redaction keeps the row, its votes and its comments; only content and
    authorship are scrubbed.
    """

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint(
            "latitude IS NULL OR (latitude >= -90 AND latitude <= 90)",
            name="ck_post_latitude_range",
        ),
        CheckConstraint(
            "longitude IS NULL OR (longitude >= -180 AND longitude <= 180)",
            name="ck_post_longitude_range",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Null once the post is redacted.
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
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    country_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("country.id", ondelete="RESTRICT"),
        nullable=False,
    )
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    # Relative URL under the uploads mount, e.g. /uploads/post_3/<name>.png
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    author: Mapped[User | None] = relationship("User", foreign_keys=[user_id])
    country: Mapped[Country] = relationship("Country")
    post_categories: Mapped[list[PostCategory]] = relationship(
        "PostCategory",
        cascade="all, delete-orphan",
    )
    post_tags: Mapped[list[PostTag]] = relationship(
        "PostTag",
        cascade="all, delete-orphan",
    )
    votes: Mapped[list[Vote]] = relationship(
        "Vote",
        back_populates="post",
        cascade="all, delete-orphan",
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
    )

    @property
    def score(self) -> int:
        """Sum of vote directions, computed from the loaded votes."""
        return sum(vote.vote_type for vote in self.votes)

    @property
    def category_names(self) -> list[str]:
        return [link.category.name for link in self.post_categories]

    @property
    def tag_names(self) -> list[str]:
        return [link.tag.name for link in self.post_tags]

"""SQLAlchemy models for seeded reference data and post join rows."""
from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tourit.db.session import Base


class Country(Base):
    """Country a post is tagged to."""

    __tablename__ = "country"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # ISO-like code, e.g. "GB".
    code: Mapped[str] = mapped_column(String(3), nullable=False, default="")


class Category(Base):
    """Broad kind of post (questions, recommendations, ...)."""

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)


class Tag(Base):
    """Free-form travel theme attached to posts."""

    __tablename__ = "tag"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)


class PostCategory(Base):
    """Join table mapping posts to categories."""

    __tablename__ = "post_category"

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("category.id", ondelete="CASCADE"),
        primary_key=True,
    )

    category: Mapped[Category] = relationship("Category", lazy="joined")


class PostTag(Base):
    """Join table mapping posts to tags."""

    __tablename__ = "post_tag"

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tag.id", ondelete="CASCADE"),
        primary_key=True,
    )

    tag: Mapped[Tag] = relationship("Tag", lazy="joined")

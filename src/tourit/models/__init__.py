# src/tourit/models/__init__.py
"""SQLAlchemy models for the Tourit application."""

from .comment import Comment
from .post import Post
from .reference import Category, Country, PostCategory, PostTag, Tag
from .user import User
from .vote import CommentVote, Vote

__all__ = [
    "Category", "Country", "PostCategory", "PostTag", "Tag",
    "Comment",
    "CommentVote", "Vote",
    "Post",
    "User",
]

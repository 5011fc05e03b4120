"""Map ORM rows to API responses, applying redaction rules."""

from __future__ import annotations

from tourit.models import Comment, Post, User
from tourit.schemas import CommentResponse, PostResponse

REMOVED_BODY = "[REMOVED]"
UNKNOWN_AUTHOR = "Unknown"
UNKNOWN_COUNTRY = "Unknown"
MY_POSTS_AUTHOR = "[My Posts]"
MY_COMMENT_AUTHOR = "[My Comment]"


def display_author(author: User | None, is_deleted: bool) -> str:
    """Return the public author name, hiding redacted or departed authors."""
    if is_deleted or author is None or not author.is_active:
        return UNKNOWN_AUTHOR
    return author.username


def to_post_response(
    post: Post,
    *,
    include_body: bool = True,
    author_override: str | None = None,
) -> PostResponse:
    """Project a post into its response shape.

    Args:
        post: Post with author, country, votes and join rows loaded.
        include_body: False for list views, which never carry the body.
        author_override: Fixed author label for owner-only listings.
    """
    author = author_override or display_author(post.author, post.is_deleted)
    country = post.country

    if post.is_deleted:
        return PostResponse(
            id=post.id,
            title=post.title,
            body=REMOVED_BODY if include_body else None,
            author_username=author,
            country_name=country.name if country else UNKNOWN_COUNTRY,
            country_code=country.code if country else None,
            created_at=post.created_at,
            score=post.score,
            is_deleted=True,
        )

    return PostResponse(
        id=post.id,
        title=post.title,
        body=post.body if include_body else None,
        author_username=author,
        country_name=country.name if country else UNKNOWN_COUNTRY,
        country_code=country.code if country else None,
        category_names=post.category_names,
        tag_names=post.tag_names,
        created_at=post.created_at,
        score=post.score,
        latitude=post.latitude,
        longitude=post.longitude,
        image_url=post.image_url,
        is_deleted=False,
    )


def to_comment_response(
    comment: Comment,
    *,
    author_override: str | None = None,
) -> CommentResponse:
    """Project a comment into its flat response shape (no replies)."""
    if comment.is_deleted or comment.body is None:
        body = REMOVED_BODY
    else:
        body = comment.body

    return CommentResponse(
        id=comment.id,
        body=body,
        user_id=None if comment.is_deleted else comment.user_id,
        author_username=author_override or display_author(comment.author, comment.is_deleted),
        post_id=comment.post_id,
        parent_comment_id=comment.parent_comment_id,
        created_at=comment.created_at,
        score=comment.score,
        is_deleted=comment.is_deleted,
    )

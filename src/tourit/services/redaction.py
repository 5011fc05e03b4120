"""Soft deletion of posts and comments.

Redaction keeps the row (and so its id, votes and replies) but scrubs the
content and the public link to the author. ``former_user_id`` keeps the
owner reachable for their own history listings.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tourit.core.errors import AuthzError, NotFoundError
from tourit.models import Comment, Post, User
from tourit.services.image_storage import ImageStorage

logger = logging.getLogger(__name__)


def _commit(db: Session, what: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to redact %s", what)
        raise


def redact_post(db: Session, post_id: int, user: User, storage: ImageStorage) -> None:
    """Redact the user's post and drop its stored images.

    Raises:
        NotFoundError: If the post is missing or already redacted.
        AuthzError: If ``user`` does not own the post.
    """
    post = db.get(Post, post_id)
    if post is None or post.is_deleted:
        logger.warning("Delete of missing post %s by user %s", post_id, user.id)
        raise NotFoundError("Post not found.")
    if post.user_id != user.id:
        logger.warning("User %s tried to delete post %s of another user", user.id, post_id)
        raise AuthzError("You can only delete your own posts.")

    post.is_deleted = True
    post.former_user_id = post.user_id
    post.user_id = None
    post.body = None
    post.image_url = None
    post.latitude = None
    post.longitude = None
    post.post_categories.clear()
    post.post_tags.clear()
    _commit(db, f"post {post_id}")

    storage.remove_post_images(post_id)
    logger.info("User %s redacted post %s", user.id, post_id)


def redact_comment(db: Session, comment_id: int, user: User) -> None:
    """Redact the user's comment; replies and votes stay attached.

    Raises:
        NotFoundError: If the comment is missing or already redacted.
        AuthzError: If ``user`` does not own the comment.
    """
    comment = db.get(Comment, comment_id)
    if comment is None or comment.is_deleted:
        logger.warning("Delete of missing comment %s by user %s", comment_id, user.id)
        raise NotFoundError("Comment not found.")
    if comment.user_id != user.id:
        logger.warning("User %s tried to delete comment %s of another user", user.id, comment_id)
        raise AuthzError("You can only delete your own comments.")

    comment.is_deleted = True
    comment.former_user_id = comment.user_id
    comment.user_id = None
    comment.body = None
    _commit(db, f"comment {comment_id}")

    logger.info("User %s redacted comment %s", user.id, comment_id)

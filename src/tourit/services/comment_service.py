"""Threaded comments: creation, listing and tree assembly."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from tourit.core.errors import NotFoundError
from tourit.models import Comment, CommentVote, Post, User
from tourit.schemas import CommentCreate, CommentResponse
from tourit.services.post_service import SORT_TOP, normalize_sort
from tourit.services.projection import MY_COMMENT_AUTHOR, to_comment_response

logger = logging.getLogger(__name__)


def build_comment_tree(nodes: list[CommentResponse]) -> list[CommentResponse]:
    """Nest flat comments under their parents.

    Input order is preserved among siblings, so feeding nodes sorted by
    creation time yields oldest-first replies at every level. A node whose
    parent is not among ``nodes`` is promoted to the root list.
    """
    by_id = {node.id: node for node in nodes}
    roots: list[CommentResponse] = []

    for node in nodes:
        node.replies = []

    for node in nodes:
        parent = by_id.get(node.parent_comment_id) if node.parent_comment_id else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.replies.append(node)
    return roots


def list_comments(db: Session, post_id: int) -> list[CommentResponse]:
    """Return the comment tree of a post, redacted comments included.

    Raises:
        NotFoundError: If the post does not exist.
    """
    if db.get(Post, post_id) is None:
        raise NotFoundError("Post not found.")

    comments = (
        db.query(Comment)
        .options(joinedload(Comment.author), selectinload(Comment.comment_votes))
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )
    return build_comment_tree([to_comment_response(comment) for comment in comments])


def create_comment(db: Session, post_id: int, author: User, payload: CommentCreate) -> Comment:
    """Add a comment, optionally as a reply, to a post.

    Raises:
        NotFoundError: If the post does not exist, or the parent comment does
            not exist on the same post.
    """
    if db.get(Post, post_id) is None:
        raise NotFoundError("Post not found.")

    if payload.parent_comment_id is not None:
        parent = db.query(Comment).filter(
            Comment.id == payload.parent_comment_id,
            Comment.post_id == post_id,
        ).first()
        if parent is None:
            raise NotFoundError("Parent comment not found or does not belong to this post.")

    comment = Comment(
        body=payload.body,
        post_id=post_id,
        user_id=author.id,
        parent_comment_id=payload.parent_comment_id,
    )
    db.add(comment)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create comment on post %s", post_id)
        raise

    db.refresh(comment)
    logger.info("User %s commented %s on post %s", author.id, comment.id, post_id)
    return comment


def list_user_comments(
    db: Session,
    user: User,
    *,
    sort_by: str | None = None,
    limit: int = 50,
) -> list[CommentResponse]:
    """Return the user's own comments as a flat list, redacted ones included."""
    query = db.query(Comment).options(selectinload(Comment.comment_votes)).filter(
        (Comment.user_id == user.id) | (Comment.former_user_id == user.id),
    )

    if normalize_sort(sort_by) == SORT_TOP:
        score = (
            select(func.coalesce(func.sum(CommentVote.vote_type), 0))
            .where(CommentVote.comment_id == Comment.id)
            .correlate(Comment)
            .scalar_subquery()
        )
        query = query.order_by(score.desc(), Comment.created_at.desc(), Comment.id.desc())
    else:
        query = query.order_by(Comment.created_at.desc(), Comment.id.desc())

    return [
        to_comment_response(comment, author_override=MY_COMMENT_AUTHOR)
        for comment in query.limit(limit).all()
    ]

"""Toggle voting for posts and comments.

Casting a vote follows the toggle pattern:

* no existing vote -> a vote row is created;
* existing vote in the same direction -> the row is deleted (un-vote);
* existing vote in the opposite direction -> the row is overwritten.

The voted-on row is locked for the duration of the toggle, and the score
returned is always re-aggregated from the vote rows rather than kept as a
counter.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tourit.core.errors import ConflictError, NotFoundError, ValidationError
from tourit.models import Comment, CommentVote, Post, Vote
from tourit.models.vote import VOTE_DIRECTIONS

logger = logging.getLogger(__name__)


def _ensure_direction(direction: int) -> None:
    if direction not in VOTE_DIRECTIONS:
        raise ValidationError("Vote direction must be 1 (like) or -1 (dislike).")


def _toggle(
    db: Session,
    vote_model: type[Vote] | type[CommentVote],
    target_column: Any,
    target_id: int,
    user_id: int,
    direction: int,
) -> str:
    """Apply the toggle to the session and return what happened."""
    existing = db.query(vote_model).filter(
        target_column == target_id,
        vote_model.user_id == user_id,
    ).first()

    if existing is None:
        db.add(vote_model(user_id=user_id, vote_type=direction, **{target_column.key: target_id}))
        return "created"

    if existing.vote_type == direction:
        db.delete(existing)
        return "removed"

    existing.vote_type = direction
    return "flipped"


def _commit_vote(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as err:
        # Two concurrent first votes by the same user; the loser gets a 400.
        db.rollback()
        raise ConflictError("Vote was changed concurrently, please retry.") from err


def post_score(db: Session, post_id: int) -> int:
    """Return the summed vote directions for a post."""
    total = db.query(func.coalesce(func.sum(Vote.vote_type), 0)).filter(
        Vote.post_id == post_id,
    ).scalar()
    return int(total or 0)


def comment_score(db: Session, comment_id: int) -> int:
    """Return the summed vote directions for a comment."""
    total = db.query(func.coalesce(func.sum(CommentVote.vote_type), 0)).filter(
        CommentVote.comment_id == comment_id,
    ).scalar()
    return int(total or 0)


def vote_post(db: Session, post_id: int, user_id: int, direction: int) -> int:
    """Toggle ``user_id``'s vote on a post and return the new score.

    Raises:
        ValidationError: If ``direction`` is not 1 or -1.
        NotFoundError: If the post does not exist.
    """
    _ensure_direction(direction)

    post = db.query(Post).filter(Post.id == post_id).with_for_update().first()
    if post is None:
        logger.warning("Vote on missing post %s by user %s", post_id, user_id)
        raise NotFoundError("Post not found.")

    outcome = _toggle(db, Vote, Vote.post_id, post_id, user_id, direction)
    _commit_vote(db)

    score = post_score(db, post_id)
    logger.info(
        "Vote %s on post %s by user %s (direction=%s, score=%s)",
        outcome, post_id, user_id, direction, score,
    )
    return score


def vote_comment(db: Session, comment_id: int, user_id: int, direction: int) -> int:
    """Toggle ``user_id``'s vote on a comment and return the new score.

    Raises:
        ValidationError: If ``direction`` is not 1 or -1.
        NotFoundError: If the comment does not exist.
    """
    _ensure_direction(direction)

    comment = db.query(Comment).filter(Comment.id == comment_id).with_for_update().first()
    if comment is None:
        logger.warning("Vote on missing comment %s by user %s", comment_id, user_id)
        raise NotFoundError("Comment not found.")

    outcome = _toggle(db, CommentVote, CommentVote.comment_id, comment_id, user_id, direction)
    _commit_vote(db)

    score = comment_score(db, comment_id)
    logger.info(
        "Vote %s on comment %s by user %s (direction=%s, score=%s)",
        outcome, comment_id, user_id, direction, score,
    )
    return score

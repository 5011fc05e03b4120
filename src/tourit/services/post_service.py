"""Post listing, lookup, creation and image attachment."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from tourit.core.errors import AuthzError, NotFoundError
from tourit.models import Category, Country, Post, PostCategory, PostTag, Tag, User, Vote
from tourit.schemas import PostCreate
from tourit.services.image_storage import ImageStorage

logger = logging.getLogger(__name__)

SORT_TOP = "top"
SORT_NEW = "new"


def _with_details(query: Query) -> Query:
    return query.options(
        joinedload(Post.author),
        joinedload(Post.country),
        selectinload(Post.votes),
        selectinload(Post.post_categories),
        selectinload(Post.post_tags),
    )


def normalize_sort(sort_by: str | None) -> str:
    """Return ``top`` or ``new``; anything unrecognised means ``new``."""
    if sort_by and sort_by.strip().lower() in (SORT_TOP, "score"):
        return SORT_TOP
    return SORT_NEW


def post_score_expression():
    """Correlated subquery summing a post's votes, for ORDER BY."""
    return (
        select(func.coalesce(func.sum(Vote.vote_type), 0))
        .where(Vote.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )


def apply_post_sort(query: Query, sort_by: str | None) -> Query:
    if normalize_sort(sort_by) == SORT_TOP:
        return query.order_by(
            post_score_expression().desc(),
            Post.created_at.desc(),
            Post.id.desc(),
        )
    return query.order_by(Post.created_at.desc(), Post.id.desc())


def list_posts(
    db: Session,
    *,
    sort_by: str | None = None,
    limit: int = 25,
    country_code: str | None = None,
) -> list[Post]:
    """Return live posts by active authors, sorted and limited.

    Args:
        db: Database session.
        sort_by: ``top`` for score order, anything else for newest first.
        limit: Maximum number of posts to return.
        country_code: Optional case-insensitive country code filter.
    """
    query = db.query(Post).join(User, Post.user_id == User.id).filter(
        Post.is_deleted.is_(False),
        User.is_active.is_(True),
    )

    if country_code and country_code.strip():
        query = query.join(Country, Post.country_id == Country.id).filter(
            func.lower(Country.code) == country_code.strip().lower(),
        )

    query = apply_post_sort(_with_details(query), sort_by)
    return query.limit(limit).all()


def list_user_posts(
    db: Session,
    user: User,
    *,
    sort_by: str | None = None,
    limit: int = 50,
) -> list[Post]:
    """Return every post the user wrote, redacted ones included."""
    query = db.query(Post).filter(
        (Post.user_id == user.id) | (Post.former_user_id == user.id),
    )
    query = apply_post_sort(_with_details(query), sort_by)
    return query.limit(limit).all()


def get_post(db: Session, post_id: int) -> Post:
    """Return a post by id, redacted or not.

    Raises:
        NotFoundError: If no post has this id.
    """
    post = _with_details(db.query(Post)).filter(Post.id == post_id).first()
    if post is None:
        raise NotFoundError("Post not found.")
    return post


def _existing_ids(db: Session, model: type[Category] | type[Tag], ids: Iterable[int] | None) -> list[int]:
    wanted = set(ids or ())
    if not wanted:
        return []
    found = db.scalars(select(model.id).where(model.id.in_(wanted))).all()
    return sorted(found)


def create_post(db: Session, author: User, payload: PostCreate) -> Post:
    """Create a post for ``author``.

    Unknown category and tag ids are dropped silently; duplicates collapse.

    Raises:
        NotFoundError: If the country does not exist.
    """
    if db.get(Country, payload.country_id) is None:
        raise NotFoundError("Selected country does not exist.")

    post = Post(
        user_id=author.id,
        title=payload.title,
        body=payload.body,
        country_id=payload.country_id,
        latitude=payload.latitude,
        longitude=payload.longitude,
    )
    post.post_categories = [
        PostCategory(category_id=category_id)
        for category_id in _existing_ids(db, Category, payload.category_ids)
    ]
    post.post_tags = [
        PostTag(tag_id=tag_id)
        for tag_id in _existing_ids(db, Tag, payload.tag_ids)
    ]

    db.add(post)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create post for user %s", author.id)
        raise

    logger.info("User %s created post %s", author.id, post.id)
    return get_post(db, post.id)


def attach_image(
    db: Session,
    post_id: int,
    user: User,
    filename: str | None,
    content: bytes,
    storage: ImageStorage,
) -> str:
    """Store an image for the user's post and return its public URL.

    The file is written before the row is updated; if the commit fails the
    new file is removed again. A previously attached image is removed after
    the commit succeeds.

    Raises:
        ValidationError: If the upload is missing, too large or of a bad type.
        NotFoundError: If the post is missing or redacted.
        AuthzError: If ``user`` does not own the post.
    """
    extension = storage.validate(filename, content)

    post = db.get(Post, post_id)
    if post is None or post.is_deleted:
        raise NotFoundError("Post not found.")
    if post.user_id != user.id:
        raise AuthzError("You can only upload images to your own posts.")

    stored = storage.save(post_id, content, extension)
    previous_url = post.image_url
    post.image_url = stored.url
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        storage.delete(stored.path)
        logger.exception("Failed to record image for post %s", post_id)
        raise

    if previous_url and previous_url != stored.url:
        storage.delete_url(previous_url)

    logger.info("User %s attached image %s to post %s", user.id, stored.url, post_id)
    return stored.url

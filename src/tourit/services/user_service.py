"""Account lifecycle: registration, login, deactivation and newsletter."""

from __future__ import annotations

import logging
import secrets

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tourit.core.errors import AuthError, ConflictError, NotFoundError, TouritError
from tourit.core.security import create_access_token, hash_password, verify_password
from tourit.models import User
from tourit.models.user import identity_key
from tourit.schemas import RegisterRequest

logger = logging.getLogger(__name__)

DELETED_EMAIL_DOMAIN = "deleted.local"


def find_by_login(db: Session, username_or_email: str) -> User | None:
    """Look up a user by username or email, ignoring case."""
    needle = identity_key(username_or_email)
    return db.query(User).filter(
        or_(User.username_key == needle, User.email_key == needle),
    ).order_by(User.id).first()


def register_user(db: Session, payload: RegisterRequest) -> User:
    """Create an account with a bcrypt-hashed password.

    Raises:
        ConflictError: If the username or email is already taken.
    """
    taken = db.query(User.id).filter(
        or_(
            User.username_key == identity_key(payload.username),
            User.email_key == identity_key(payload.email),
        ),
    ).first()
    if taken is not None:
        logger.warning("Registration rejected for username %r: already in use", payload.username)
        raise ConflictError("Username or Email already exists.")

    user = User(
        username=payload.username,
        email=payload.email,
        password_hash=hash_password(payload.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        logger.warning("Registration for %r lost a uniqueness race", payload.username)
        raise ConflictError("Username or Email already exists.") from err

    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


def authenticate(db: Session, username_or_email: str, password: str) -> User:
    """Return the active user matching the credentials.

    Raises:
        AuthError: If no active user matches or the password is wrong.
    """
    user = find_by_login(db, username_or_email)
    if user is None or not user.is_active or not verify_password(password, user.password_hash):
        logger.info("Failed login for %r", username_or_email)
        raise AuthError("Invalid credentials.")
    return user


def login(db: Session, username_or_email: str, password: str) -> str:
    """Authenticate and issue an access token."""
    user = authenticate(db, username_or_email, password)
    logger.info("User %s logged in", user.id)
    return create_access_token(user.id, user.username, user.email)


def get_profile(user: User) -> User:
    """Return the user if still active.

    Raises:
        NotFoundError: If the account was deactivated.
    """
    if not user.is_active:
        raise NotFoundError("User not found.")
    return user


def deactivate_account(db: Session, user: User) -> None:
    """Overwrite identifying data with placeholders and disable the account.

    Raises:
        TouritError: If the placeholder collides with an existing row.
    """
    user.username = f"[DELETED_{user.id}_{secrets.token_hex(4)}]"
    user.email = f"{user.id}@{DELETED_EMAIL_DOMAIN}"
    user.password_hash = ""
    user.is_subscribed = False
    user.is_active = False
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        logger.exception("Deactivation of user %s hit a uniqueness conflict", user.id)
        raise TouritError("An error occurred while deactivating the account.") from err

    logger.info("Deactivated user %s", user.id)


def set_subscription(db: Session, user: User, subscribed: bool) -> bool:
    """Set the newsletter flag; returns True if anything changed."""
    if user.is_subscribed == subscribed:
        return False

    user.is_subscribed = subscribed
    db.commit()
    logger.info("User %s %s the newsletter", user.id, "subscribed to" if subscribed else "unsubscribed from")
    return True

"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from tourit.core.errors import AuthError
from tourit.core.security import decode_access_token
from tourit.db.session import get_db
from tourit.models import User
from tourit.services.image_storage import ImageStorage, get_image_storage

# Missing credentials are turned into a 401 below rather than by the scheme.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        db: Database session

    Returns:
        User object for the authenticated user, active or not

    Raises:
        AuthError: If the token is missing or invalid or the user is gone
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Not authenticated")

    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise AuthError("Could not validate credentials") from err

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as err:
        raise AuthError("Could not validate credentials") from err

    user = db.get(User, user_id)
    if user is None:
        raise AuthError("User not found")
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_active_user(user: CurrentUserDep) -> User:
    """Reject tokens that belong to deactivated accounts."""
    if not user.is_active:
        raise AuthError("Account is deactivated")
    return user


ActiveUserDep = Annotated[User, Depends(get_active_user)]


def get_image_storage_dep() -> ImageStorage:
    """Return the image store for the current settings."""
    return get_image_storage()


ImageStorageDep = Annotated[ImageStorage, Depends(get_image_storage_dep)]

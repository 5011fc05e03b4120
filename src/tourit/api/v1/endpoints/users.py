"""Endpoints for the caller's own profile and history."""

from fastapi import APIRouter, Query, Response, status

from tourit.api.v1.dependencies import ActiveUserDep, CurrentUserDep, SessionDep
from tourit.core.settings import settings
from tourit.schemas import CommentResponse, PostResponse, UserProfile
from tourit.services import comment_service, post_service, user_service
from tourit.services.projection import MY_POSTS_AUTHOR, to_post_response

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserProfile)
def get_profile(current_user: CurrentUserDep) -> UserProfile:
    """Return the caller's profile; deactivated accounts are reported as missing."""
    return UserProfile.model_validate(user_service.get_profile(current_user))


@router.get("/me/posts", response_model=list[PostResponse])
def get_my_posts(
    current_user: ActiveUserDep,
    db: SessionDep,
    sort_by: str = Query("new", alias="sortBy", description="'new' or 'top'"),
    limit: int = Query(
        settings.default_profile_limit,
        ge=1,
        le=settings.max_list_limit,
        description="Maximum number of posts to return",
    ),
) -> list[PostResponse]:
    """List every post the caller wrote, redacted ones included."""
    posts = post_service.list_user_posts(db, current_user, sort_by=sort_by, limit=limit)
    return [to_post_response(post, author_override=MY_POSTS_AUTHOR) for post in posts]


@router.get("/me/comments", response_model=list[CommentResponse])
def get_my_comments(
    current_user: ActiveUserDep,
    db: SessionDep,
    sort_by: str = Query("new", alias="sortBy", description="'new', 'top' or 'score'"),
    limit: int = Query(
        settings.default_profile_limit,
        ge=1,
        le=settings.max_list_limit,
        description="Maximum number of comments to return",
    ),
) -> list[CommentResponse]:
    """List every comment the caller wrote as a flat list."""
    return comment_service.list_user_comments(db, current_user, sort_by=sort_by, limit=limit)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def deactivate_account(current_user: ActiveUserDep, db: SessionDep) -> Response:
    """Deactivate the caller's account and scrub its identifying data."""
    user_service.deactivate_account(db, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Post-related endpoints for the Tourit API."""

from fastapi import APIRouter, File, Query, Response, UploadFile, status

from tourit.api.v1.dependencies import ActiveUserDep, ImageStorageDep, SessionDep
from tourit.core.settings import settings
from tourit.schemas import (
    CommentCreate,
    CommentResponse,
    ImageUploadResponse,
    PostCreate,
    PostResponse,
    ScoreResponse,
    VoteCreate,
)
from tourit.services import comment_service, post_service, redaction, vote_service
from tourit.services.projection import to_comment_response, to_post_response

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostResponse])
def list_posts(
    db: SessionDep,
    sort_by: str = Query("new", alias="sortBy", description="'new' or 'top'"),
    limit: int = Query(
        settings.default_post_limit,
        ge=1,
        le=settings.max_list_limit,
        description="Maximum number of posts to return",
    ),
    country_code: str | None = Query(None, alias="countryCode", description="Filter by country code"),
) -> list[PostResponse]:
    """List live posts, newest first or by score. Bodies are omitted."""
    posts = post_service.list_posts(db, sort_by=sort_by, limit=limit, country_code=country_code)
    return [to_post_response(post, include_body=False) for post in posts]


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, db: SessionDep) -> PostResponse:
    """Get a single post with its body; redacted posts come back scrubbed."""
    return to_post_response(post_service.get_post(db, post_id))


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> PostResponse:
    """Create a post owned by the caller."""
    post = post_service.create_post(db, current_user, payload)
    return to_post_response(post)


@router.post("/{post_id}/vote", response_model=ScoreResponse)
def vote_post(
    post_id: int,
    payload: VoteCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> ScoreResponse:
    """Toggle the caller's vote on a post and return the new score."""
    score = vote_service.vote_post(db, post_id, current_user.id, payload.direction)
    return ScoreResponse(score=score)


@router.post("/{post_id}/image", response_model=ImageUploadResponse)
def upload_image(
    post_id: int,
    current_user: ActiveUserDep,
    db: SessionDep,
    storage: ImageStorageDep,
    image_file: UploadFile | None = File(None, alias="imageFile"),
) -> ImageUploadResponse:
    """Attach an image to one of the caller's posts."""
    filename = None
    content = b""
    if image_file is not None:
        filename = image_file.filename
        # One byte past the limit is enough to detect an oversized upload.
        content = image_file.file.read(storage.max_bytes + 1)

    image_url = post_service.attach_image(db, post_id, current_user, filename, content, storage)
    return ImageUploadResponse(image_url=image_url)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: int,
    current_user: ActiveUserDep,
    db: SessionDep,
    storage: ImageStorageDep,
) -> Response:
    """Redact one of the caller's posts."""
    redaction.redact_post(db, post_id, current_user, storage)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
def list_comments(post_id: int, db: SessionDep) -> list[CommentResponse]:
    """Return the post's comments as a nested tree."""
    return comment_service.list_comments(db, post_id)


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    post_id: int,
    payload: CommentCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> CommentResponse:
    """Comment on a post, or reply to one of its comments."""
    comment = comment_service.create_comment(db, post_id, current_user, payload)
    return to_comment_response(comment)

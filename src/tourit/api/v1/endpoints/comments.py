"""Comment endpoints that address a comment directly."""

from fastapi import APIRouter, Response, status

from tourit.api.v1.dependencies import ActiveUserDep, SessionDep
from tourit.schemas import ScoreResponse, VoteCreate
from tourit.services import redaction, vote_service

router = APIRouter(prefix="/comments", tags=["comments"])


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: int,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> Response:
    """Redact one of the caller's comments."""
    redaction.redact_comment(db, comment_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{comment_id}/vote", response_model=ScoreResponse)
def vote_comment(
    comment_id: int,
    payload: VoteCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> ScoreResponse:
    """Toggle the caller's vote on a comment and return the new score."""
    score = vote_service.vote_comment(db, comment_id, current_user.id, payload.direction)
    return ScoreResponse(score=score)

"""Newsletter subscription endpoints."""

from fastapi import APIRouter

from tourit.api.v1.dependencies import ActiveUserDep, SessionDep
from tourit.schemas import MessageResponse, NewsletterStatus
from tourit.services import user_service

router = APIRouter(prefix="/newsletter", tags=["newsletter"])


@router.post("/subscribe", response_model=MessageResponse)
def subscribe(current_user: ActiveUserDep, db: SessionDep) -> MessageResponse:
    user_service.set_subscription(db, current_user, True)
    return MessageResponse(message="Subscription successful.")


@router.post("/unsubscribe", response_model=MessageResponse)
def unsubscribe(current_user: ActiveUserDep, db: SessionDep) -> MessageResponse:
    user_service.set_subscription(db, current_user, False)
    return MessageResponse(message="Unsubscription successful.")


@router.get("/status", response_model=NewsletterStatus)
def get_status(current_user: ActiveUserDep) -> NewsletterStatus:
    return NewsletterStatus(is_subscribed=current_user.is_subscribed)

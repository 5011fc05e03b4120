"""Authentication endpoints for the Tourit API."""

from fastapi import APIRouter

from tourit.api.v1.dependencies import SessionDep
from tourit.schemas import LoginRequest, LoginResponse, MessageResponse, RegisterRequest
from tourit.services import user_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=MessageResponse)
def register(payload: RegisterRequest, db: SessionDep) -> MessageResponse:
    """Create an account. The caller still has to log in afterwards."""
    user_service.register_user(db, payload)
    return MessageResponse(message="Registration successful")


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Exchange a username or email and password for a bearer token."""
    token = user_service.login(db, payload.username_or_email, payload.password)
    return LoginResponse(token=token)

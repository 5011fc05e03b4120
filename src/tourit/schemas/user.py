"""Account, authentication and profile Pydantic schemas."""

import re
from datetime import datetime

from pydantic import Field, field_validator

from tourit.schemas.common import CamelModel

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class RegisterRequest(CamelModel):
    """Schema for account registration."""

    username: str = Field(..., min_length=1, max_length=100, description="Public username")
    email: str = Field(..., min_length=3, max_length=255, description="Contact email")
    password: str = Field(..., min_length=6, max_length=128, description="Plain-text password")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Reject usernames that are only whitespace."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Username is required")
        return stripped

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate the email has a plausible address shape."""
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email format")
        return v


class LoginRequest(CamelModel):
    """Schema for login submissions."""

    username_or_email: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1, description="Plain-text password")


class LoginResponse(CamelModel):
    """Response returned after successful login."""

    token: str = Field(..., description="JWT bearer token")


class UserProfile(CamelModel):
    """Current user's own profile."""

    id: int
    username: str
    email: str
    is_subscribed: bool
    created_at: datetime


class NewsletterStatus(CamelModel):
    """Newsletter subscription flag for the current user."""

    is_subscribed: bool

"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse
from .common import CamelModel, MessageResponse
from .post import ImageUploadResponse, PostCreate, PostResponse
from .reference import CategoryResponse, CountryResponse, TagResponse
from .user import LoginRequest, LoginResponse, NewsletterStatus, RegisterRequest, UserProfile
from .vote import ScoreResponse, VoteCreate

__all__ = [
    "CamelModel", "MessageResponse",
    "CommentCreate", "CommentResponse",
    "ImageUploadResponse", "PostCreate", "PostResponse",
    "CategoryResponse", "CountryResponse", "TagResponse",
    "LoginRequest", "LoginResponse", "NewsletterStatus", "RegisterRequest", "UserProfile",
    "ScoreResponse", "VoteCreate",
]

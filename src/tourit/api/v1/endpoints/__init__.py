"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .comments import router as comments_router
from .newsletter import router as newsletter_router
from .posts import router as posts_router
from .reference import categories_router, countries_router, tags_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "posts_router",
    "comments_router",
    "users_router",
    "newsletter_router",
    "countries_router",
    "categories_router",
    "tags_router",
]

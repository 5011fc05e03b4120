"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    categories_router,
    comments_router,
    countries_router,
    newsletter_router,
    posts_router,
    tags_router,
    users_router,
)

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

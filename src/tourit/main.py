# src/tourit/main.py
"""Main entry point for the Tourit application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from tourit.api.v1 import (
    auth_router,
    categories_router,
    comments_router,
    countries_router,
    newsletter_router,
    posts_router,
    tags_router,
    users_router,
)
from tourit.core.errors import AuthError, TouritError
from tourit.core.logging import configure_logging
from tourit.core.settings import settings
from tourit.db.session import SessionLocal, create_tables
from tourit.init_db import seed_reference_data

logger = logging.getLogger(__name__)

VALIDATION_TITLE = "One or more validation errors occurred."

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Tourism discussion forum API",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(posts_router, prefix=settings.api_prefix)
app.include_router(comments_router, prefix=settings.api_prefix)
app.include_router(users_router, prefix=settings.api_prefix)
app.include_router(newsletter_router, prefix=settings.api_prefix)
app.include_router(countries_router, prefix=settings.api_prefix)
app.include_router(categories_router, prefix=settings.api_prefix)
app.include_router(tags_router, prefix=settings.api_prefix)

# Uploaded images; the directory is created on startup.
app.mount(
    settings.uploads_url_prefix,
    StaticFiles(directory=settings.uploads_dir, check_dir=False),
    name="uploads",
)


@app.exception_handler(TouritError)
async def tourit_error_handler(request: Request, exc: TouritError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as a field -> messages map."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        # Drop the "body"/"query"/"path" source marker.
        field = ".".join(location[1:]) or (location[0] if location else "request")
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"title": VALIDATION_TITLE, "errors": errors},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred."},
    )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging(settings.log_level, sql_debug=settings.sql_debug)
    settings.uploads_dir.mkdir(parents=True, exist_ok=True)

    if settings.auto_create_tables:
        create_tables()
    if settings.seed_reference_data:
        with SessionLocal() as db:
            seed_reference_data(db)

    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "description": "Tourism discussion forum API",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("tourit.main:app", host="0.0.0.0", port=8000, reload=settings.debug)

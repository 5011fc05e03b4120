"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from tourit.schemas.common import CamelModel


class PostCreate(CamelModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=300, description="Plain-text title")
    body: str = Field(..., min_length=1, description="Markdown body")
    country_id: int = Field(..., description="Country the post is about")
    category_ids: list[int] | None = Field(None, description="Optional category ids")
    tag_ids: list[int] | None = Field(None, description="Optional tag ids")
    latitude: float | None = Field(
        None,
        ge=-90.0,
        le=90.0,
        description="Latitude must be between -90 and 90.",
    )
    longitude: float | None = Field(
        None,
        ge=-180.0,
        le=180.0,
        description="Longitude must be between -180 and 180.",
    )

    @field_validator("title", "body")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field must not be blank")
        return v


class PostResponse(CamelModel):
    """Schema for post information returned by the API.

    ``body`` is null in list views and present in single-post responses.
    """

    id: int
    title: str
    body: str | None = None
    author_username: str
    country_name: str
    country_code: str | None = None
    category_names: list[str] = Field(default_factory=list)
    tag_names: list[str] = Field(default_factory=list)
    created_at: datetime
    score: int
    latitude: float | None = None
    longitude: float | None = None
    image_url: str | None = None
    is_deleted: bool = False


class ImageUploadResponse(CamelModel):
    """Location of a freshly stored post image."""

    image_url: str

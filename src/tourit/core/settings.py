"""Application settings and configuration.

This module defines all configuration options for the Tourit application.
Settings are loaded from environment variables with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Tourit", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_issuer: str = Field(default="tourit-api", alias="JWT_ISSUER")
    jwt_audience: str = Field(default="tourit-client", alias="JWT_AUDIENCE")
    access_token_expire_minutes: int = Field(default=60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Database configuration
    database_url: str = Field(default="sqlite:///./tourit.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")
    seed_reference_data: bool = Field(default=True, alias="SEED_REFERENCE_DATA")

    # HTTP surface
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    default_post_limit: int = Field(default=25, alias="DEFAULT_POST_LIMIT")
    default_profile_limit: int = Field(default=50, alias="DEFAULT_PROFILE_LIMIT")
    max_list_limit: int = Field(default=100, alias="MAX_LIST_LIMIT")

    # Image uploads
    uploads_dir: Path = Field(default=Path("uploads"), alias="UPLOADS_DIR")
    uploads_url_prefix: str = Field(default="/uploads", alias="UPLOADS_URL_PREFIX")
    max_image_bytes: int = Field(default=5 * 1024 * 1024, alias="MAX_IMAGE_BYTES")
    allowed_image_extensions: list[str] = Field(
        default=[".jpg", ".jpeg", ".png", ".webp"],
        alias="ALLOWED_IMAGE_EXTENSIONS",
    )

    # CORS configuration for the SPA dev server
    cors_origins: list[str] = Field(
        default=["http://localhost:5173"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_sqlite(self) -> bool:
        """Return True when the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


settings = Settings()  # type: ignore[call-arg]

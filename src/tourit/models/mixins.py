# src/tourit/models/mixins.py
"""Column mixins shared by content models."""

from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


class CreatedAtMixin:
    """Adds a ``created_at`` column populated on insert."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )


class RedactableMixin:
    """Soft-delete flag shared by posts and comments.

    Redacted rows stay in place with ``is_deleted`` set; their content is
    scrubbed by the redaction service.
    """

    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

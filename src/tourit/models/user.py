"""SQLAlchemy model for registered accounts."""

from __future__ import annotations

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from tourit.db.session import Base
from tourit.models.mixins import CreatedAtMixin


def identity_key(value: str) -> str:
    """Case-folded form used for uniqueness checks and login lookups."""
    return value.strip().casefold()


class User(CreatedAtMixin, Base):
    """Registered account.

    Accounts are never hard-deleted; deactivation overwrites the identifying
    columns with placeholders and flips ``is_active``. ``username_key`` and
    ``email_key`` follow ``username``/``email`` automatically.
    """

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    # Case-folding can lengthen text, hence the wider key columns.
    username_key: Mapped[str] = mapped_column(String(400), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    email_key: Mapped[str] = mapped_column(String(1024), unique=True, nullable=False)
    # Empty string once the account is deactivated.
    password_hash: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_subscribed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    @validates("username")
    def _sync_username_key(self, key: str, value: str) -> str:
        self.username_key = identity_key(value)
        return value

    @validates("email")
    def _sync_email_key(self, key: str, value: str) -> str:
        self.email_key = identity_key(value)
        return value

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"

"""Shared Pydantic base classes and small response payloads."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema whose JSON field names are camelCase.

    Python code keeps snake_case attribute names; both spellings are accepted
    on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Plain acknowledgement returned by action endpoints."""

    message: str = Field(..., description="Human-readable outcome")

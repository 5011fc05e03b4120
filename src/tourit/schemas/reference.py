"""Schemas for seeded reference data."""

from tourit.schemas.common import CamelModel


class CountryResponse(CamelModel):
    id: int
    name: str
    code: str


class CategoryResponse(CamelModel):
    id: int
    name: str


class TagResponse(CamelModel):
    id: int
    name: str

"""Read-only endpoints for seeded reference data."""

from fastapi import APIRouter
from sqlalchemy import func

from tourit.api.v1.dependencies import SessionDep
from tourit.core.errors import NotFoundError
from tourit.models import Category, Country, Tag
from tourit.schemas import CategoryResponse, CountryResponse, TagResponse

countries_router = APIRouter(prefix="/countries", tags=["reference"])
categories_router = APIRouter(prefix="/categories", tags=["reference"])
tags_router = APIRouter(prefix="/tags", tags=["reference"])


@countries_router.get("", response_model=list[CountryResponse])
def list_countries(db: SessionDep) -> list[Country]:
    return db.query(Country).order_by(Country.name, Country.id).all()


@countries_router.get("/code/{code}", response_model=CountryResponse)
def get_country_by_code(code: str, db: SessionDep) -> Country:
    """Look up a country by its code, ignoring case."""
    country = db.query(Country).filter(
        func.lower(Country.code) == code.strip().lower(),
    ).first()
    if country is None:
        raise NotFoundError(f"Country with code '{code}' not found.")
    return country


@categories_router.get("", response_model=list[CategoryResponse])
def list_categories(db: SessionDep) -> list[Category]:
    return db.query(Category).order_by(Category.name, Category.id).all()


@tags_router.get("", response_model=list[TagResponse])
def list_tags(db: SessionDep) -> list[Tag]:
    return db.query(Tag).order_by(Tag.name, Tag.id).all()

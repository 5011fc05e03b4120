"""Create the schema and seed reference data.

Run with ``python -m tourit.init_db``.
"""

import logging

from sqlalchemy.orm import Session

from tourit.core.logging import configure_logging
from tourit.core.settings import settings
from tourit.db.session import SessionLocal, create_tables
from tourit.models import Category, Country, Tag

logger = logging.getLogger(__name__)

COUNTRIES = [
    ("United States", "US"),
    ("Canada", "CA"),
    ("Mexico", "MX"),
    ("United Kingdom", "GB"),
    ("France", "FR"),
    ("Japan", "JP"),
    ("Italy", "IT"),
    ("Greece", "GR"),
]

CATEGORIES = [
    "Recommendations",
    "Questions",
    "Travel Stories",
    "Tips & Tricks",
    "Food & Drink",
]

TAGS = [
    "Budget Travel",
    "Luxury Travel",
    "Adventure",
    "Relaxation",
    "Hiking",
    "Beaches",
    "City Break",
    "Culture",
    "Nightlife",
]


def seed_reference_data(db: Session) -> None:
    """Insert countries, categories and tags into empty tables.

    Tables that already hold rows are left alone, so this is safe to run on
    every start.
    """
    if db.query(Country.id).first() is None:
        db.add_all(Country(name=name, code=code) for name, code in COUNTRIES)
        logger.info("Seeded %d countries", len(COUNTRIES))
    if db.query(Category.id).first() is None:
        db.add_all(Category(name=name) for name in CATEGORIES)
        logger.info("Seeded %d categories", len(CATEGORIES))
    if db.query(Tag.id).first() is None:
        db.add_all(Tag(name=name) for name in TAGS)
        logger.info("Seeded %d tags", len(TAGS))
    db.commit()


def init_db() -> None:
    """Initialize the database by creating all tables and seeding them."""
    create_tables()
    with SessionLocal() as db:
        seed_reference_data(db)


if __name__ == "__main__":
    configure_logging(settings.log_level, sql_debug=settings.sql_debug)
    init_db()
    logger.info("Database initialized.")

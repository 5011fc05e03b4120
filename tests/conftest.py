# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789abcdef0123456789abcdef")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["SEED_REFERENCE_DATA"] = "false"
os.environ["UPLOADS_DIR"] = tempfile.mkdtemp(prefix="tourit-test-uploads-")

from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tourit.api.v1.dependencies import get_image_storage_dep  # noqa: E402
from tourit.core.security import create_access_token, hash_password  # noqa: E402
from tourit.core.settings import settings  # noqa: E402
from tourit.db.session import Base  # noqa: E402
from tourit.db.session import get_db as app_get_session  # noqa: E402
from tourit.init_db import seed_reference_data  # noqa: E402
from tourit.main import app as fastapi_app  # noqa: E402
from tourit.models import Category, Comment, Country, Post, PostCategory, PostTag, Tag, User  # noqa: E402
from tourit.services.image_storage import ImageStorage  # noqa: E402

TEST_DB_URL = "sqlite://"
DEFAULT_PASSWORD = "secret1"

_USER_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session shared by the test body and the app, with reference data seeded."""
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    seed_reference_data(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture(autouse=True)
def image_storage(app: FastAPI, tmp_path: Any) -> Iterator[ImageStorage]:
    """Point image uploads at a per-test directory."""
    storage = ImageStorage(
        root=tmp_path / "uploads",
        url_prefix=settings.uploads_url_prefix,
        max_bytes=settings.max_image_bytes,
        allowed_extensions=settings.allowed_image_extensions,
    )
    app.dependency_overrides[get_image_storage_dep] = lambda: storage
    try:
        yield storage
    finally:
        app.dependency_overrides.pop(get_image_storage_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def bearer(user: User) -> dict[str, str]:
    """Return authorization headers carrying a fresh token for ``user``."""
    token = create_access_token(user.id, user.username, user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    """Expose ``bearer`` to tests that build tokens for ad-hoc users."""
    return bearer


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Factory persisting users with a known password."""

    def _make_user(
        username: str | None = None,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        is_active: bool = True,
    ) -> User:
        n = next(_USER_COUNTER)
        user = User(
            username=username or f"traveller{n}",
            email=email or f"traveller{n}@example.com",
            password_hash=hash_password(password),
            is_active=is_active,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return a persisted test user."""
    return make_user(username="alice", email="alice@example.com")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted user."""
    return make_user(username="bob", email="bob@example.com")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return bearer(other_user)


@pytest.fixture()
def country(db_session: Session) -> Country:
    """Return the seeded United Kingdom row."""
    return db_session.query(Country).filter(Country.code == "GB").one()


def category_id(db_session: Session, name: str) -> int:
    return db_session.query(Category).filter(Category.name == name).one().id


def tag_id(db_session: Session, name: str) -> int:
    return db_session.query(Tag).filter(Tag.name == name).one().id


@pytest.fixture()
def reference_id(db_session: Session) -> Callable[[str, str], int]:
    """Look up a seeded category or tag id by kind and name."""

    def _reference_id(kind: str, name: str) -> int:
        lookup = category_id if kind == "category" else tag_id
        return lookup(db_session, name)

    return _reference_id


@pytest.fixture()
def make_post(db_session: Session, country: Country) -> Callable[..., Post]:
    """Factory persisting posts directly, bypassing the API."""

    def _make_post(
        author: User,
        title: str = "Weekend in London",
        body: str = "Markets, museums and a lot of rain.",
        country_id: int | None = None,
        categories: list[str] | None = None,
        tags: list[str] | None = None,
    ) -> Post:
        post = Post(
            user_id=author.id,
            title=title,
            body=body,
            country_id=country_id or country.id,
        )
        post.post_categories = [
            PostCategory(category_id=category_id(db_session, name)) for name in categories or []
        ]
        post.post_tags = [PostTag(tag_id=tag_id(db_session, name)) for name in tags or []]
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    """Create a baseline post owned by the primary test user."""
    return make_post(test_user, categories=["Recommendations"], tags=["City Break"])


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    """Factory persisting comments directly, bypassing the API."""

    def _make_comment(
        author: User,
        post: Post,
        body: str = "Great tips, thanks!",
        parent: Comment | None = None,
    ) -> Comment:
        comment = Comment(
            user_id=author.id,
            post_id=post.id,
            body=body,
            parent_comment_id=parent.id if parent else None,
        )
        db_session.add(comment)
        db_session.commit()
        db_session.refresh(comment)
        return comment

    return _make_comment

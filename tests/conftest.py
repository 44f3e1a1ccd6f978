"""
Pytest fixtures: in-memory SQLite per test, a temporary upload root, and a
TestClient wired to both.
"""

import os
from collections.abc import Iterator

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from portfolio_admin.auth import create_access_token  # noqa: E402
from portfolio_admin.config import Settings  # noqa: E402
from portfolio_admin.database import Base, build_engine, get_db  # noqa: E402
from portfolio_admin.main import create_app  # noqa: E402
from portfolio_admin.models import User  # noqa: E402
from portfolio_admin.services.storage import FileStore  # noqa: E402


@pytest.fixture
def test_db() -> Iterator[sessionmaker]:
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )
    yield TestingSessionLocal
    engine.dispose()


@pytest.fixture
def test_session(test_db) -> Iterator[Session]:
    session = test_db()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(tmp_path) -> FileStore:
    s = FileStore(tmp_path / "uploads")
    s.init_buckets()
    return s


@pytest.fixture
def test_app_client(test_db, tmp_path) -> Iterator[tuple[TestClient, sessionmaker]]:
    app = create_app(Settings(upload_dir=str(tmp_path / "uploads")))

    def override_get_db() -> Iterator[Session]:
        db = test_db()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    # 500s are asserted on, not re-raised
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client, test_db


def make_user(session_factory, email="owner@example.com", **fields) -> int:
    session = session_factory()
    user = User(email=email, **fields)
    session.add(user)
    session.commit()
    user_id = user.id
    session.close()
    return user_id


def auth_headers(user_id: int) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def owner(test_app_client) -> tuple[TestClient, int, dict, sessionmaker]:
    """Client plus a persisted user and a valid bearer header for it."""
    client, session_factory = test_app_client
    user_id = make_user(session_factory, name="Ada Lovelace", phone_number="555-0100", degree="BSc")
    return client, user_id, auth_headers(user_id), session_factory

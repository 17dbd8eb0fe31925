# tests/conftest.py
import os

# Settings are read at import time, so the test environment goes in first.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("BOOK_UPSERT_RETRY_DELAY", "0")
os.environ.setdefault("GOOGLE_BOOKS_API_KEY", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from libreria.api.deps import get_session_manager
from libreria.api.main import app
from libreria.clients import google_books
from libreria.crud import create_user, ensure_book
from libreria.db.session import configure_engine, get_db, init_db
from libreria.schemas.user import UserCreate

# --- Test Database Setup ---
# A fresh in-memory SQLite database per test. StaticPool keeps the single
# connection alive so every session (and the API threadpool) sees the same data.
TEST_DATABASE_URL = "sqlite://"

@pytest.fixture
def db_engine():
    engine = configure_engine(create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    ))
    init_db(bind=engine)
    yield engine
    engine.dispose()

@pytest.fixture
def db_session_factory(db_engine):
    """Returns a SQLAlchemy session factory bound to the test engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

@pytest.fixture
def db_session(db_session_factory):
    session = db_session_factory()
    try:
        yield session
    finally:
        session.close()

# --- Domain factories ---

@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make(name=None, email=None, password="password123"):
        counter["n"] += 1
        n = counter["n"]
        return create_user(db_session, UserCreate(
            name=name or f"Reader {n}",
            email=email or f"reader{n}@example.com",
            password=password,
        ))
    return _make

@pytest.fixture
def author_user(make_user):
    return make_user(name="Author", email="author@example.com")

@pytest.fixture
def voter_user(make_user):
    return make_user(name="Voter", email="voter@example.com")

@pytest.fixture
def cached_book(db_session):
    return ensure_book(
        db_session,
        book_id="B123",
        title="The Left Hand of Darkness",
        authors=["Ursula K. Le Guin"],
        description="Genly Ai on Gethen.",
        thumbnail_url="http://books.example.com/b123.jpg",
    )

# --- API ---

@pytest.fixture
def client(db_session_factory):
    def _override_get_db():
        db = db_session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

@pytest.fixture
def auth_headers():
    def _headers(user):
        token = get_session_manager().issue(user.id, user.email)
        return {"Authorization": f"Bearer {token}"}
    return _headers

CATALOG = {
    "B123": {
        "id": "B123",
        "volumeInfo": {
            "title": "The Left Hand of Darkness",
            "authors": ["Ursula K. Le Guin"],
            "description": "Genly Ai on Gethen.",
            "imageLinks": {"smallThumbnail": "http://books.example.com/b123-small.jpg"},
        },
    },
    "B456": {
        "id": "B456",
        "volumeInfo": {
            "title": "Solaris",
            "authors": ["Stanisław Lem"],
            "imageLinks": {"thumbnail": "http://books.example.com/b456.jpg"},
        },
    },
}

@pytest.fixture
def fake_catalog(monkeypatch):
    """Replaces the Google Books client with an in-memory catalog and records calls."""
    calls = {"search": [], "get": []}

    async def _search_volumes(query, max_results=None, client=None):
        calls["search"].append(query)
        return [volume for volume in CATALOG.values()
                if query.lower() in volume["volumeInfo"]["title"].lower()]

    async def _get_volume(volume_id, client=None):
        calls["get"].append(volume_id)
        return CATALOG.get(volume_id)

    monkeypatch.setattr(google_books, "search_volumes", _search_volumes)
    monkeypatch.setattr(google_books, "get_volume", _get_volume)
    return calls

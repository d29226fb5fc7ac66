import random

import pytest
from fastapi.testclient import TestClient

from shortlinks.core.config import Settings
from shortlinks.db.database import Database
from shortlinks.main import build_link_service, create_app


class ScriptedRng:
    """Stands in for random.Random: ``choice`` returns the next character of a script."""

    def __init__(self, script: str):
        self._chars = iter(script)

    def choice(self, seq):
        return next(self._chars)


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def settings():
    # "sqlite://" is a fresh in-memory database for every engine
    return Settings(DATABASE_URL="sqlite://", BASE_URL="https://sho.rt")


@pytest.fixture
def app(settings):
    return create_app(settings, rng=random.Random(1234))


@pytest.fixture
def client(app):
    """Test client with the app's startup/shutdown lifecycle running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def database(settings):
    db = Database(settings)
    db.create_all()
    try:
        yield db
    finally:
        db.dispose()


@pytest.fixture
def db_session(database):
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def file_database(tmp_path):
    """File-backed SQLite so several threads can hold their own connections."""
    settings = Settings(DATABASE_URL=f"sqlite:///{tmp_path / 'links.db'}", DB_POOL_TIMEOUT=30)
    db = Database(settings)
    db.create_all()
    try:
        yield db
    finally:
        db.dispose()


@pytest.fixture
def link_service(settings):
    return build_link_service(settings, rng=random.Random(42))


@pytest.fixture
def sample_urls():
    """Provides sample URLs for testing."""
    return [
        "https://example.com/test1",
        "https://google.com/search?q=test",
        "https://github.com/user/repo",
    ]

"""Shared pytest fixtures: in-memory MongoDB, app, client and session helper."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import mongomock
import pytest

# Ensure the application package is importable during tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from workvista.config import AppConfig  # noqa: E402
from workvista.main import create_app  # noqa: E402

TEST_SECRET = "test-token-secret"


@pytest.fixture(autouse=True)
def mongo_db():
    """Provide an isolated in-memory MongoDB database for each test."""
    test_db_name = "test_workvista"
    client = mongomock.MongoClient()
    db = client[test_db_name]

    yield db

    client.drop_database(test_db_name)


@pytest.fixture
def config() -> AppConfig:
    # The test client talks plain http, so keep the cookie non-secure here.
    return AppConfig(token_secret=TEST_SECRET, session_cookie_secure=False)


@pytest.fixture
def app(config, mongo_db):
    flask_app = create_app(config, mongo_db)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client) -> Callable[[str], None]:
    """Return a helper that opens a session for ``email`` on the test client."""

    def _login(email: str) -> None:
        response = client.post("/access-token", json={"email": email})
        assert response.status_code == 200
        assert response.get_json() == {"success": True}

    return _login

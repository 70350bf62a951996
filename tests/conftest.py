"""Shared fixtures: a freshly seeded database and an API client per test."""

import pytest
from fastapi.testclient import TestClient

from lab_dashboard_api.app.core.db import init_db
from lab_dashboard_api.app.main import app

API = "/api/v1"


@pytest.fixture
def chat_path(tmp_path):
    return str(tmp_path / "data" / "chat.json")


@pytest.fixture
def db(chat_path):
    return init_db(reset=True, chat_path=chat_path)


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def lenient_client(db):
    """Client that turns unhandled server errors into 500 responses."""
    return TestClient(app, raise_server_exceptions=False)
